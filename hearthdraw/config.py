from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "HearthDraw"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/hearthdraw"

    hearthstonejson_url: str = "https://api.hearthstonejson.com/v1/latest"
    card_locale: str = "zhCN"

    # Pack odds as relative weights, in draw order
    rarity_probabilities: dict[str, float] = Field(
        default_factory=lambda: {
            "COMMON": 0.7162,
            "RARE": 0.2266,
            "EPIC": 0.0448,
            "LEGENDARY": 0.0124,
        }
    )

    # Guarantee policies
    guarantee_rare_or_higher: bool = True
    early_legendary_pack: int = 10
    legendary_pity_timer: int = 40

    max_packs_per_draw: int = 500
    max_batch_size: int = 100


settings = Settings()


# =============================================================================
# GAME CONSTANTS
# =============================================================================

# Cards per booster pack
PACK_SIZE = 5

# Cards in a constructed deck
DECK_SIZE = 30

# Copy limits per card in a constructed deck
MAX_COPIES = 2
MAX_LEGENDARY_COPIES = 1

# Deck code header values
DECK_CODE_VERSION = 1
DECK_FORMAT_TAG = 2
