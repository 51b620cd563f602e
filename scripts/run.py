#!/usr/bin/env python3
"""
AI Studio API startup script
"""

import asyncio
import secrets
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def generate_env_file():
    """Generate .env file with a random secret key if it doesn't exist"""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        return

    env_path.write_text(f"SECRET_KEY={secrets.token_urlsafe(48)}\n")
    print("Generated .env file with random secret key")


async def main():
    import uvicorn

    generate_env_file()

    from aistudio.config import settings
    from aistudio.database import init_db

    print("Initializing database...")
    await init_db()
    print("Database initialized successfully.")

    print(f"API server starting on http://{settings.HOST}:{settings.PORT}")

    config = uvicorn.Config(
        "aistudio.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
