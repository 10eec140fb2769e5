"""Seed the development database with synthetic emotion-detection records.

Two simulated customer sessions on one day, one record every 5 seconds,
with a quiet gap between them so the chart shows two segments.

Usage:
    python scripts/seed_demo_data.py 2024-05-01
"""
import asyncio
import math
import random
import sys
from datetime import datetime, timedelta

from satisfaction_api.storage.database import EmotionRow, dispose_engine, get_session_factory, init_db


def session_rows(start: datetime, samples: int, base_happiness: float) -> list[EmotionRow]:
    rows = []
    for i in range(samples):
        # Happier towards the middle of the session, with noise
        wave = 0.3 * math.sin((i / samples) * math.pi)
        happiness = max(0.0, min(1.0, base_happiness + wave + random.uniform(-0.05, 0.05)))
        rows.append(
            EmotionRow(
                timestamp=start + timedelta(seconds=5 * i),
                happiness=round(happiness, 4),
                surprise=round(random.uniform(0, 0.2), 4),
                sadness=round(random.uniform(0, 0.1), 4),
                anger=round(random.uniform(0, 0.05), 4),
                disgust=0.0,
                fear=round(random.uniform(0, 0.05), 4),
                neutral=round(max(0.0, 1 - happiness), 4),
            )
        )
    return rows


async def main(day: str) -> None:
    base = datetime.strptime(day, "%Y-%m-%d")
    await init_db()

    rows = session_rows(base.replace(hour=10), samples=36, base_happiness=0.2)
    rows += session_rows(base.replace(hour=14, minute=30), samples=18, base_happiness=0.4)

    async with get_session_factory()() as session:
        session.add_all(rows)
        await session.commit()
    await dispose_engine()
    print(f"Inserted {len(rows)} records for {day}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))
