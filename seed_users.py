"""
Insert users into the configured document store.
Users are read from a JSON file holding a list of objects with
id, first_name, last_name, birthday (YYYY-MM-DD) and marital_status.

Usage:
    python seed_users.py users.json
"""
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables (store settings, AWS credentials) from .env file
load_dotenv()

from cost_manager.core.config import settings  # noqa: E402
from cost_manager.core.errors import CostManagerError  # noqa: E402
from cost_manager.db.base import USERS  # noqa: E402
from cost_manager.db.store import build_store  # noqa: E402


def main(argv):
    if len(argv) != 2:
        print(__doc__)
        return 1

    users_file = Path(argv[1])
    if not users_file.exists():
        print(f"ERROR: {users_file} not found")
        return 1

    with users_file.open() as fp:
        users = json.load(fp)

    if settings.STORAGE_BACKEND == "memory":
        print("WARNING: STORAGE_BACKEND=memory, users will not outlive this script")

    store = build_store(settings)
    try:
        store.ping()
        inserted = store.insert_many(USERS, users)
    except CostManagerError as e:
        print(f"ERROR: {e.message}")
        return 1
    finally:
        store.close()

    for user in inserted:
        print(f"Inserted user {user['id']}: {user['first_name']} {user['last_name']}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
