"""
One-off migration: copy employees from a JSON file store into the database store.

Usage:
    python scripts/migrate_file_to_database.py ./data/employees.json sqlite+aiosqlite:///./employees.db

Records are re-created through the normal store path, so they get fresh ids
and timestamps. Emails that already exist in the database are skipped and
the script keeps going.
"""
from __future__ import annotations

import argparse
import asyncio

from employee_directory.errors import DuplicateEmailError, ValidationError
from employee_directory.records import EDITABLE_FIELDS
from employee_directory.store import FileEmployeeStore, FindOptions, SqlEmployeeStore


async def migrate(data_file: str, database_url: str) -> int:
    source = FileEmployeeStore(data_file)
    target = SqlEmployeeStore.from_url(database_url)
    await target.create_schema()

    copied = 0
    try:
        result = await source.find(options=FindOptions(sort_field="createdAt"))
        print(f"Found {result.total} employees in {data_file}")

        for record in result.records:
            payload = {field: record[field] for field in EDITABLE_FIELDS if field in record}
            try:
                await target.create(payload)
            except DuplicateEmailError:
                print(f"SKIP: {record.get('email')} already exists")
                continue
            except ValidationError as exc:
                print(f"FAILED: {record.get('_id')}: {exc}")
                continue
            copied += 1
            print(f"OK: {record.get('email')}")
    finally:
        await target.close()

    print(f"Copied {copied} of {result.total} employees")
    return copied


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("data_file", help="path to the employees JSON array")
    parser.add_argument("database_url", help="async SQLAlchemy URL, e.g. sqlite+aiosqlite:///./employees.db")
    args = parser.parse_args()
    asyncio.run(migrate(args.data_file, args.database_url))


if __name__ == "__main__":
    main()
