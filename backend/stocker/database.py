from stocker.config import get_settings
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie

settings = get_settings()

_mongo_client: AsyncIOMotorClient | None = None


def database_name(uri: str) -> str:
    """Database name from the URI path, 'stocker' when the URI has none."""
    db_name = uri.rsplit("/", 1)[-1].split("?")[0]
    return db_name or "stocker"


async def init_db() -> None:
    """Initialize MongoDB (Beanie) and register document models."""
    global _mongo_client
    _mongo_client = AsyncIOMotorClient(settings.MONGODB_URI)
    from stocker.models import OTPCode, User

    await init_beanie(
        database=_mongo_client[database_name(settings.MONGODB_URI)],
        document_models=[OTPCode, User],
    )


async def ping_db() -> bool:
    """Check MongoDB connectivity."""
    if not _mongo_client:
        return False
    try:
        await _mongo_client.admin.command("ping")
        return True
    except Exception:
        return False


def close_db() -> None:
    global _mongo_client
    if _mongo_client:
        _mongo_client.close()
        _mongo_client = None
