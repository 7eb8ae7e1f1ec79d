"""
Scheduler Module Entry Point

Allows execution via: python -m apps.scheduler

Delegates to the snapshot scheduler for all execution modes (scheduled and RUN_ONCE).
"""

import asyncio

from apps.scheduler.snapshot import main

if __name__ == "__main__":
    asyncio.run(main())
