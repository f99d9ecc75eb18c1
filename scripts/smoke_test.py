#!/usr/bin/env python3
"""
Smoke test for a running nameguess server.

Usage:
    python scripts/smoke_test.py [BASE_URL]
"""
import sys
import time

import requests

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"


def run():
    print("=" * 60)
    print("NAMEGUESS SMOKE TEST")
    print("=" * 60)

    guesser = f"smoke_{int(time.time())}"

    print("\n[1] STATUS")
    resp = requests.get(f"{BASE_URL}/api/status")
    print(f"Status: {resp.status_code}")
    print(f"Response: {resp.json()}\n")

    print("[2] COUNT BEFORE")
    before = requests.get(f"{BASE_URL}/api/count").json()['count']
    print(f"Count: {before}\n")

    print("[3] SUBMIT (JSON)")
    resp = requests.post(f"{BASE_URL}/guess", json={
        "guesser": guesser,
        "name": ["Mia", "  ", "Leo"],
    })
    print(f"Status: {resp.status_code}")
    print(f"Response: {resp.json()}\n")

    print("[4] SUBMIT (form)")
    resp = requests.post(f"{BASE_URL}/guess", data={"guesser": guesser, "name": " Mia "},
                         allow_redirects=False)
    print(f"Status: {resp.status_code} -> {resp.headers.get('Location')}\n")

    print("[5] COUNT AFTER")
    after = requests.get(f"{BASE_URL}/api/count").json()['count']
    print(f"Count: {after} (expected {before + 3})\n")

    print("[6] STATS")
    stats = requests.get(f"{BASE_URL}/api/stats").json()
    print(f"Summary: {stats['summary']}")
    mine = [g for g in stats['guessers'] if g['guesser'] == guesser]
    print(f"Ours: {mine}\n")

    print("[7] POPULAR")
    print(f"Response: {requests.get(f'{BASE_URL}/api/popular').json()}\n")

    ok = after == before + 3 and mine and mine[0]['names'] == ['Mia', 'Leo', 'Mia']
    print("RESULT:", "PASS" if ok else "FAIL")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(run())
