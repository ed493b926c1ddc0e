#!/usr/bin/env python3
# This project was developed with assistance from AI tools.
"""Live smoke test suite for the Kvartplan API.

Validates the calculator endpoints, the market data feeds, response
schemas and error handling against a running server instance.

Prerequisites:
  - API server running on localhost:8000 (uvicorn kvartplan.main:app)
  - Outbound internet access for the feed checks (skip with --no-feeds)

Usage:
  ./scripts/live-tests.py              # full suite
  ./scripts/live-tests.py --no-feeds   # skip restate.ru / cbr.ru checks
"""

import argparse
import asyncio
import sys

import httpx

BASE = "http://localhost:8000"
HEADERS = {"Origin": "http://localhost:3000"}

# ---------------------------------------------------------------------------
# Test runner
# ---------------------------------------------------------------------------

PASS = 0
FAIL = 0
ERRORS: list[str] = []
SECTION = ""


def section(name: str):
    global SECTION
    SECTION = name
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}\n")


def ok(name: str, passed: bool, detail: str = ""):
    global PASS, FAIL
    if passed:
        PASS += 1
        print(f"  PASS  {name}")
    else:
        FAIL += 1
        msg = f"[{SECTION}] {name}: {detail}" if detail else f"[{SECTION}] {name}"
        ERRORS.append(msg)
        print(f"  FAIL  {name} -- {detail}")


def has_keys(d: dict, *keys: str) -> bool:
    return all(k in d for k in keys)


# ---------------------------------------------------------------------------
# 1. Health
# ---------------------------------------------------------------------------

async def test_health(c: httpx.AsyncClient):
    section("Health")

    r = await c.get("/health/")
    ok("GET /health/ returns 200", r.status_code == 200)
    data = r.json()
    ok("response is a list", isinstance(data, list))
    ok("API status is healthy",
       any(s.get("name") == "API" and s.get("status") == "healthy" for s in data))

    r = await c.get("/")
    ok("GET / root returns 200", r.status_code == 200)
    ok("root has welcome message", "message" in r.json())


# ---------------------------------------------------------------------------
# 2. Calculator
# ---------------------------------------------------------------------------

async def test_calculator(c: httpx.AsyncClient):
    section("Calculator")

    r = await c.get("/api/public/defaults")
    ok("GET /api/public/defaults returns 200", r.status_code == 200)
    defaults = r.json()
    ok("defaults have all inputs",
       has_keys(defaults, "apartment_price", "monthly_savings", "mortgage_term"))

    r = await c.get("/api/public/apartment-types")
    ok("GET /api/public/apartment-types returns 200", r.status_code == 200)
    ok("six apartment types", len(r.json()) == 6, f"count={len(r.json())}")

    r = await c.post("/api/public/calculate", json=defaults)
    ok("POST /api/public/calculate returns 200", r.status_code == 200)
    data = r.json()
    ok("result has mortgage fields",
       has_keys(data, "monthly_mortgage_payment", "total_mortgage_payment", "mortgage_overpayment"))
    months = data.get("months_to_down_payment", -1)
    ok("down payment reachable for defaults", 0 < months < 600, f"months={months}")
    ok("overpayment positive", data.get("mortgage_overpayment", 0) > 0)
    ok("121 projection points", len(data.get("monthly_projection", [])) == 121)
    ok("down payment wait text", bool(data.get("down_payment_wait")))
    ok("yearly table capped at 11 rows", len(data.get("yearly_projection", [])) <= 11)

    r = await c.post("/api/public/calculate", json={**defaults, "monthly_savings": 0})
    data = r.json()
    ok("zero savings is infeasible (-1)", data.get("months_to_down_payment") == -1,
       f"months={data.get('months_to_down_payment')}")


# ---------------------------------------------------------------------------
# 3. Market data feeds
# ---------------------------------------------------------------------------

async def test_feeds(c: httpx.AsyncClient):
    section("Market data feeds")

    r = await c.get("/api/prices", params={"type": "3", "period": "2"})
    ok("GET /api/prices returns 200", r.status_code == 200)
    body = r.json()
    ok("prices envelope", has_keys(body, "success", "data"))
    ok("prices live (not fallback)", body.get("success") is True, body.get("error") or "")
    price = body.get("data", {}).get("price_per_sqm", {}).get("new_building", 0)
    ok("new building price per m2 positive", price > 0, f"price={price}")

    r = await c.get("/api/cbr")
    ok("GET /api/cbr returns 200", r.status_code == 200)
    body = r.json()
    ok("rates live (not fallback)", body.get("success") is True, body.get("error") or "")
    data = body.get("data", {})
    ok("key rate present", data.get("key_rate", 0) > 0)
    ok("deposit rate below key rate",
       data.get("deposit_rate", 0) < data.get("key_rate", 0))


# ---------------------------------------------------------------------------
# 4. Error handling
# ---------------------------------------------------------------------------

async def test_error_handling(c: httpx.AsyncClient):
    section("Error Handling (RFC 7807)")

    r = await c.get("/api/nonexistent")
    ok("404 status code", r.status_code == 404)
    body = r.json()
    ok("404 has problem fields", has_keys(body, "type", "title", "status", "detail"))

    r = await c.post("/api/public/calculate", json={"mortgage_term": 0})
    ok("422 status code", r.status_code == 422)
    ok("422 has status=422", r.json().get("status") == 422)

    r = await c.post("/api/public/calculate", json={"apartment_price": "Infinity"})
    ok("non-finite input returns 422", r.status_code == 422)

    r = await c.get("/api/prices", params={"type": "9"})
    ok("unknown apartment type returns 422", r.status_code == 422)

    r = await c.get("/api/public/calculate")
    ok("405 for wrong method", r.status_code == 405)


# ---------------------------------------------------------------------------
# 5. OpenAPI
# ---------------------------------------------------------------------------

async def test_openapi(c: httpx.AsyncClient):
    section("OpenAPI Specification")

    r = await c.get("/openapi.json")
    ok("GET /openapi.json returns 200", r.status_code == 200)
    spec = r.json()
    ok("spec title is Kvartplan",
       "kvartplan" in spec.get("info", {}).get("title", "").lower())
    ok("spec has calculator path", "/api/public/calculate" in spec.get("paths", {}))


async def main():
    parser = argparse.ArgumentParser(description="Live test suite for Kvartplan API")
    parser.add_argument("--no-feeds", action="store_true",
                        help="Skip checks that need restate.ru and cbr.ru")
    args = parser.parse_args()

    print("=" * 60)
    print("  LIVE TEST SUITE -- Kvartplan API")
    print("=" * 60)

    async with httpx.AsyncClient(base_url=BASE, headers=HEADERS, timeout=30) as c:
        try:
            r = await c.get("/health/")
            if r.status_code != 200:
                print(f"\n  Server returned {r.status_code} on /health/ -- is it running?")
                sys.exit(2)
        except httpx.ConnectError:
            print("\n  Cannot connect to server at localhost:8000 -- is it running?")
            sys.exit(2)

        await test_health(c)
        await test_calculator(c)
        if not args.no_feeds:
            await test_feeds(c)
        await test_error_handling(c)
        await test_openapi(c)

    print(f"\n{'=' * 60}")
    print(f"  RESULTS: {PASS} passed, {FAIL} failed")
    print(f"{'=' * 60}")

    if ERRORS:
        print("\nFailures:")
        for e in ERRORS:
            print(f"  - {e}")

    sys.exit(0 if FAIL == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
