"""
Smoke script, run against a live server.

Usage:
  1. Start server:  uvicorn ops_dashboard.main:app --reload
  2. Run checks:    python smoke_api.py

Hits every endpoint group and prints results. No pytest needed.
"""

import os
import sys

import httpx

BASE = os.environ.get("BASE_URL", "http://localhost:8000")
API_KEY = os.environ.get("API_KEY", "dev-api-key-change-me")
HEADERS = {"X-API-Key": API_KEY}

passed = 0
failed = 0


def check(name: str, method: str, url: str, expected_status: int = 200,
          headers: dict | None = None, **kwargs):
    global passed, failed
    try:
        resp = getattr(httpx, method)(
            f"{BASE}{url}", headers=headers if headers is not None else HEADERS, **kwargs
        )
        ok = resp.status_code == expected_status
        status = "✅" if ok else "❌"
        print(f"{status} {name} → {resp.status_code}")
        if ok:
            passed += 1
        else:
            failed += 1
            print(f"   Expected {expected_status}, got {resp.status_code}")
            print(f"   Body: {resp.text[:300]}")
        return resp.json() if ok else None
    except httpx.HTTPError as e:
        failed += 1
        print(f"❌ {name} → ERROR: {e}")
        return None


print("=" * 60)
print("  OPERATIONS DASHBOARD API — SMOKE CHECKS")
print("=" * 60)

# ── Health ────────────────────────────────────────────────
print("\n── Health ──")
check("Health check", "get", "/health", headers={})
check("Client config", "get", "/api/config", headers={})

# ── Loads ─────────────────────────────────────────────────
print("\n── Loads ──")
check("Loads without key", "get", "/loads", 401, headers={})

data = check("Loads, default page", "get", "/loads")
if data:
    print(f"   → {data['total']} loads, showing {len(data['items'])}")

data = check("Loads, limit capped", "get", "/loads", params={"limit": 500})
if data:
    assert data["limit"] == 100, f"Expected limit 100, got {data['limit']}"
    print("   → limit capped at 100 ✓")

data = check("Loads by rate desc", "get", "/loads",
             params={"sort_by": "loadboard_rate", "sort_order": "desc", "limit": 3})
if data:
    print(f"   → top rates: {[i['loadboard_rate'] for i in data['items']]}")

# ── Call metrics ──────────────────────────────────────────
print("\n── Call metrics ──")

data = check("Record won call", "post", "/call-metrics", 201, json={
    "agent_name": "Pablo",
    "equipment_type": "dry_van",
    "outcome_tag": "won_transferred",
    "sentiment_tag": "positive",
    "negotiation_rounds": 2,
    "loadboard_rate": 1500,
    "final_rate": 1580,
    "related_load_id": "LOAD-001",
})
if data:
    print(f"   → {data['id']}: {data['message']}")

check("Won call without final rate", "post", "/call-metrics", 400, json={
    "agent_name": "Pablo",
    "equipment_type": "dry_van",
    "outcome_tag": "won_transferred",
    "sentiment_tag": "positive",
    "negotiation_rounds": 2,
    "loadboard_rate": 1500,
})

data = check("Summary, last 30 days", "get", "/api/call-metrics/summary",
             params={"date_range": "last30"})
if data:
    print(f"   Total calls : {data['total_calls']}")
    print(f"   Win rate    : {data['win_rate']:.1%}")
    print(f"   Uplift      : {data['avg_uplift_pct']:.1%}")
    print(f"   Sentiment   : {data['sentiment_score']:+.2f}")

for path in ("agents", "outcome-breakdown", "wins-segmented",
             "price-disagreement-breakdown", "no-fit-breakdown", "agent-metrics"):
    check(f"Call metrics {path}", "get", f"/api/call-metrics/{path}")

# ── Carrier calls ─────────────────────────────────────────
print("\n── Carrier calls ──")
data = check("Carrier call analytics", "get", "/api/carrier-calls/analytics")
if data:
    print(f"   → {data['kpis']['total_calls']} calls over {len(data['lanes'])} lanes")

# ── Map ───────────────────────────────────────────────────
print("\n── Map ──")
data = check("Map points", "get", "/api/map/points")
if data:
    print(f"   → {len(data['features'])} features")
data = check("Won routes", "get", "/api/map/routes")
if data:
    print(f"   → {len(data)} routes")

# ── Summary ───────────────────────────────────────────────
print("\n" + "=" * 60)
total = passed + failed
print(f"  RESULTS: {passed}/{total} passed", end="")
if failed:
    print(f" — {failed} FAILED ⚠️")
else:
    print(" — ALL PASSED 🎉")
print("=" * 60)

sys.exit(1 if failed else 0)
