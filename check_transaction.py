"""
Check a transaction result and report the Schema / Attestation it created

Usage:
    python check_transaction.py <digest> [--kind Schema|Attestation] [--owner 0x...]
"""
import argparse
import asyncio
import sys
from typing import Optional

from config import get_settings
from models.schemas import ObjectKind
from services import AttestationService, ObjectNotFoundError
from services.sui_gateway import SuiGateway


async def check(digest: str, kind: ObjectKind, owner: Optional[str] = None) -> int:
    settings = get_settings()
    gateway = SuiGateway.from_settings(settings)
    service = AttestationService.from_settings(gateway, settings)

    try:
        print("=" * 60)
        print(f"Checking transaction: {digest}")
        print("=" * 60)

        result = await service.resolve_transaction(digest, kind)
        if not result.created_object_id:
            print(f"\nNo created {kind.value} found in transaction")
            return 1

        print(f"\n  *** {kind.value.upper()} CREATED! ***")
        print(f"      Object ID: {result.created_object_id}")

        try:
            record = await service.get_object_by_id(result.created_object_id)
            print(f"      Type: {record.type}")
            print(f"      Version: {record.version}")
        except ObjectNotFoundError as e:
            print(f"      Not readable yet: {e.reason}")

        if owner:
            print("\n" + "=" * 60)
            print(f"Checking {kind.value} objects owned by {owner}...")
            print("=" * 60)
            page = await service.owner_scanner.scan_owned_objects(kind, owner, limit=50)
            print(f"\nFound {len(page.data)} {kind.value} objects")
            for record in page.data:
                print(f"  - {record.object_id}")

        return 0
    finally:
        await gateway.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve the object created by a Sui transaction")
    parser.add_argument("digest", help="Transaction digest")
    parser.add_argument("--kind", choices=[k.value for k in ObjectKind], default=ObjectKind.ATTESTATION.value)
    parser.add_argument("--owner", default=None, help="Also list objects of this kind owned by an address")
    args = parser.parse_args()

    return asyncio.run(check(args.digest, ObjectKind(args.kind), args.owner))


if __name__ == "__main__":
    sys.exit(main())
