"""
Order Integrity Verification Script

Checks the live order list of a running server: unique ids, strictly
increasing order numbers, and statuses inside the lifecycle enum.
Run from project root: python scripts/verify.py

Version: 1.0.0
"""

import argparse
import sys
from collections import Counter
from datetime import datetime

import httpx

API_BASE_URL = "http://localhost:8000"
VALID_STATUSES = {"pending", "preparing", "ready", "delivered", "cancelled"}


def verify_orders(base_url: str = API_BASE_URL) -> bool:
    """Verify order list integrity after simulation."""

    print("=" * 60)
    print("🔍 ORDER VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"🎯 Server: {base_url}")
    print("=" * 60)

    try:
        response = httpx.get(f"{base_url}/api/orders", timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        print(f"\n❌ Could not fetch orders: {e}")
        print("   Is the server running? uvicorn orderhub.main:app")
        return False

    orders = response.json()["data"]
    ok = True

    print("\n📊 STATISTICS:")
    print(f"   Total Orders: {len(orders)}")
    statuses = Counter(o["status"] for o in orders)
    for status, count in sorted(statuses.items()):
        print(f"   {status}: {count}")

    # Duplicate ids
    duplicates = [oid for oid, n in Counter(o["id"] for o in orders).items() if n > 1]
    if duplicates:
        ok = False
        print(f"\n⚠️ {len(duplicates)} duplicate order IDs found: {duplicates[:5]}")
    else:
        print("\n✅ No duplicate order IDs")

    # Order numbers, oldest first
    numbers = [o["orderNumber"] for o in reversed(orders)]
    if all(a < b for a, b in zip(numbers, numbers[1:])):
        print("✅ Order numbers strictly increasing")
    else:
        ok = False
        print("⚠️ Order numbers are not strictly increasing")

    unknown = set(statuses) - VALID_STATUSES
    if unknown:
        ok = False
        print(f"⚠️ Unknown statuses: {sorted(unknown)}")
    else:
        print("✅ All statuses valid")

    if orders:
        total = sum(o["total"] for o in orders)
        print("\n💰 REVENUE:")
        print(f"   Total: ₹{total:.2f}")
        print(f"   Average: ₹{total / len(orders):.2f}")

        print("\n📋 RECENT ORDERS:")
        print("-" * 60)
        for o in orders[:5]:
            print(f"   #{o['orderNumber']:<5} {o['id']:<18} {o['customerInfo']['name']:<20} "
                  f"₹{o['total']:<8} {o['status']}")

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if ok else "❌ VERIFICATION FAILED")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Integrity Verification")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    sys.exit(0 if verify_orders(args.url.rstrip("/")) else 1)
