import asyncio

from uptune import models  # noqa: F401
from uptune.database import Base, async_session, engine
from uptune.seed import seed_community_lists


async def async_main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        created = await seed_community_lists(session)

    await engine.dispose()
    print(f"Seeded {created} community lists.")


if __name__ == "__main__":
    asyncio.run(async_main())
