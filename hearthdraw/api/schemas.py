"""Response models shared by several routers."""

from pydantic import BaseModel, Field

from hearthdraw.models.card import Card


class CardResponse(BaseModel):
    """A catalog card as returned by the API."""

    id: str
    dbf_id: int
    name: str
    rarity: str
    card_set: str
    card_class: str
    cost: int | None = None
    attack: int | None = None
    health: int | None = None
    text: str | None = None
    card_type: str | None = None
    mechanics: list[str] = Field(default_factory=list)
    races: list[str] = Field(default_factory=list)
    spell_school: str | None = None

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(
            id=card.id,
            dbf_id=card.dbf_id,
            name=card.name,
            rarity=card.rarity.value,
            card_set=card.card_set,
            card_class=card.card_class,
            cost=card.cost,
            attack=card.attack,
            health=card.health,
            text=card.text,
            card_type=card.card_type,
            mechanics=list(card.mechanics),
            races=list(card.races),
            spell_school=card.spell_school,
        )
