"""
Rush Hour Simulation Script

Fires concurrent orders at a running server, then walks a share of them
through the kitchen lifecycle to exercise realtime fan-out under load.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any, Optional

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:8000"
TOTAL_ORDERS = 50
LIFECYCLE = ["preparing", "ready", "delivered"]

# Sample data for random orders
FIRST_NAMES = ["Asha", "Ravi", "Meera", "Arjun", "Priya", "Kabir", "Neha", "Vikram", "Anaya", "Rohan"]
LAST_NAMES = ["Verma", "Sharma", "Iyer", "Patel", "Reddy", "Gupta", "Nair", "Singh", "Das", "Mehta"]
STREETS = ["MG Road", "Linking Road", "Park Street", "Brigade Road", "Anna Salai", "FC Road"]
CITIES = ["Delhi", "Mumbai", "Kolkata", "Bengaluru", "Chennai", "Pune"]


def generate_random_customer() -> dict[str, Any]:
    """Generate random customer info."""
    return {
        "name": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        "phone": f"9{random.randint(100000000, 999999999)}",
        "address": {
            "fullAddress": f"{random.randint(1, 250)} {random.choice(STREETS)}, {random.choice(CITIES)}",
        },
    }


def generate_random_items(menu: list[dict]) -> list[dict]:
    """Pick 1-4 lines from the live menu."""
    available = [item for item in menu if item.get("available", True)] or menu
    lines = []
    for item in random.sample(available, k=min(len(available), random.randint(1, 4))):
        lines.append({
            "id": item["id"],
            "name": item["name"],
            "price": item["price"],
            "quantity": random.randint(1, 3),
        })
    return lines


def generate_order_payload(menu: list[dict]) -> dict[str, Any]:
    """Generate a camelCase payload for POST /api/orders."""
    items = generate_random_items(menu)
    delivery_charge = random.choice([0, 30, 40])
    subtotal = sum(line["price"] * line["quantity"] for line in items)
    return {
        "items": items,
        "total": subtotal + delivery_charge,
        "customerInfo": generate_random_customer(),
        "paymentMethod": random.choice(["COD", "UPI", "CARD"]),
        "deliveryCharge": delivery_charge,
    }


# =============================================================================
# ORDER FLOW
# =============================================================================

async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    menu: list[dict],
) -> dict[str, Any]:
    """Place one order and time the round trip."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=generate_order_payload(menu),
            timeout=30.0,
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            data = response.json()["data"]
            return {
                "order_num": order_num,
                "success": True,
                "order_id": data["id"],
                "total": data["total"],
                "estimated_time": data["estimatedTime"],
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def advance_order(client: httpx.AsyncClient, order_id: str) -> Optional[str]:
    """Move an order through the kitchen. Returns the last status reached."""
    reached = None
    for status in LIFECYCLE[:random.randint(1, len(LIFECYCLE))]:
        await asyncio.sleep(random.uniform(0, 0.2))
        response = await client.put(
            f"{API_BASE_URL}/api/orders/{order_id}/status",
            json={"status": status},
            timeout=30.0,
        )
        if response.status_code != 200:
            print(f"   ⚠️ {order_id} -> {status}: {response.text[:80]}")
            break
        reached = status
    return reached


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_orders: int = TOTAL_ORDERS, advance_share: float = 0.5) -> dict[str, Any]:
    """
    Run the rush hour simulation.

    Args:
        num_orders: Number of orders to place concurrently
        advance_share: Fraction of placed orders to walk through statuses
    """
    print("=" * 70)
    print("🔥 RUSH HOUR SIMULATION - CONCURRENT ORDER TEST")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        menu = (await client.get(f"{API_BASE_URL}/api/menu")).json()["data"]
        if not menu:
            print("\n❌ Menu is empty, nothing to order.")
            return {"total": num_orders, "successful": 0, "failed": num_orders}

        print("\n🚀 Firing orders...\n")
        results = await asyncio.gather(
            *[send_order(client, i + 1, menu) for i in range(num_orders)]
        )

        successful = [r for r in results if r["success"]]
        to_advance = random.sample(successful, k=int(len(successful) * advance_share))
        print(f"👨‍🍳 Advancing {len(to_advance)} orders through the kitchen...\n")
        reached = await asyncio.gather(
            *[advance_order(client, r["order_id"]) for r in to_advance]
        )

    total_time = round(time.time() - start_time, 2)
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        avg_eta = round(sum(r["estimated_time"] for r in successful) / len(successful), 1)
        total_revenue = sum(r["total"] for r in successful)

        print("\n📈 Performance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   ⏳ Average Estimate: {avg_eta} min")
        print(f"   💰 Total Revenue: ₹{total_revenue:.2f}")

    if reached:
        print("\n🍳 Status Reached:")
        for status in LIFECYCLE:
            print(f"   {status}: {sum(1 for r in reached if r == status)}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)
    print("🔍 NEXT STEP: python scripts/verify.py")
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_server() -> bool:
    """Health check before firing traffic."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health", timeout=5.0)
        except httpx.HTTPError as e:
            print(f"❌ Server unreachable: {e}")
            return False
    if response.status_code != 200:
        print(f"❌ Health check failed: {response.text}")
        return False
    data = response.json()
    print(f"✅ Status: {data.get('status')} ({data.get('environment')}), "
          f"{data.get('connections')} live connections")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rush Hour Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--advance", type=float, default=0.5, help="Share of orders to advance")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    if not asyncio.run(check_server()):
        sys.exit(1)

    asyncio.run(run_simulation(num_orders=args.orders, advance_share=args.advance))
