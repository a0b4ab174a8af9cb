#!/usr/bin/env python
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv


def main():
    # Load .env at repo root
    repo_root = Path(__file__).resolve().parents[1]
    env_path = repo_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    migrations_url = os.getenv("MIGRATIONS_DATABASE_URL")
    if migrations_url:
        os.environ["DATABASE_URL"] = migrations_url

    revision = sys.argv[1] if len(sys.argv) > 1 else "head"
    cmd = [sys.executable, "-m", "alembic", "upgrade", revision]
    result = subprocess.run(cmd, cwd=repo_root)
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
