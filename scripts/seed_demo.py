"""
Seed a demo provider, a patient assigned to them, and two goals.

Usage
-----

    python -m scripts.seed_demo
    python -m scripts.seed_demo --password hunter22 --prefix demo2
"""
from __future__ import annotations

import argparse
import asyncio
from typing import Any, List

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.progress import ProgressCalculator
from services.auth import hash_password
from services.db import DocumentStore, engine, init_models

# ────────────────────────────────────────────────────────────────────
_DEFAULT_GOALS: List[dict[str, Any]] = [
    {
        "title": "Daily steps",
        "category": "fitness",
        "target_value": 10000,
        "current_value": 6500,
        "unit": "steps",
    },
    {
        "title": "Sleep eight hours",
        "category": "sleep",
        "target_value": 8,
        "current_value": 6,
        "unit": "hours",
    },
]

_calc = ProgressCalculator()


async def _seed(prefix: str, password: str) -> None:
    eng = await engine()
    await init_models(eng)
    session = async_sessionmaker(eng, expire_on_commit=False)

    async with session() as db:
        store = DocumentStore(db)
        pw = hash_password(password)

        provider = await store.insert("users", {
            "name": "Dr. Demo",
            "email": f"{prefix}.provider@example.com",
            "password_hash": pw,
            "role": "provider",
            "specialization": "General practice",
            "license_number": f"{prefix.upper()}-0001",
            "years_of_experience": 7,
        })
        patient = await store.insert("users", {
            "name": "Pat Demo",
            "email": f"{prefix}.patient@example.com",
            "password_hash": pw,
            "role": "patient",
            "age": 34,
            "gender": "female",
            "health_conditions": ["asthma"],
            "assigned_provider": provider.id,
            "profile_complete": True,
        })
        for g in _DEFAULT_GOALS:
            await store.insert("goals", {
                **g,
                "user_id": patient.id,
                "progress": _calc.compute(g["current_value"], g["target_value"]),
            })

    print(f"✓ provider {provider.id}, patient {patient.id} (+{len(_DEFAULT_GOALS)} goals)")


def main() -> None:
    ap = argparse.ArgumentParser(description="Insert demo users and goals")
    ap.add_argument("--prefix", default="demo", help="email / licence prefix")
    ap.add_argument("--password", default="secret1")
    args = ap.parse_args()
    asyncio.run(_seed(args.prefix, args.password))


if __name__ == "__main__":
    main()
