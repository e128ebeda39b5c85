from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKCONVERTER_")

    app_name: str = "deckconverter"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"
    user_agent: str = "deckconverter/1.0"
    request_timeout: float = 30.0

    # Scryfall asks for 50-100ms between requests
    api_call_interval: float = 0.1


settings = Settings()


class ImageQuality(str, Enum):
    """Image quality tiers offered by Scryfall."""

    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"
    PNG = "png"


# High resolution tiers are only usable when the card has a high-res scan
HIGH_RESOLUTION_QUALITIES = frozenset({ImageQuality.LARGE, ImageQuality.PNG})


# =============================================================================
# CARD BACKS
# =============================================================================

DEFAULT_BACK = "default"

CARD_BACKS: dict[str, str] = {
    DEFAULT_BACK: "http://cloud-3.steamusercontent.com/ugc/998016607072060763/7AFEF2CE9E7A7DB735C93CF33CC4C378CBF4B20D/",
    "planechase": "http://cloud-3.steamusercontent.com/ugc/998016607072060000/1713AE8643632456D06F1BBA962C5514DD8CCC76/",
    "archenemy": "http://cloud-3.steamusercontent.com/ugc/998016607072055936/0598975AB8EC26E8956D84F9EC73BBE5754E6C80/",
    # M filler card back
    "m_filler": "http://cloud-3.steamusercontent.com/ugc/998016607072059554/6BF846C387B045FF524AE42758F6962FE3774CDB/",
}
