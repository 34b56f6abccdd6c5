"""Walk a running server through one short conversation.

Usage: SMOKE_URL=http://host:port python scripts/smoke_client.py
"""
import os
import sys
import json
import uuid
import requests

BASE_URL = os.environ.get("SMOKE_URL", "http://127.0.0.1:5000").rstrip("/")
API = f"{BASE_URL}/api"
HEADERS = {"X-API-Key": os.environ["API_KEY"]} if os.environ.get("API_KEY") else {}


def call(method: str, path: str, **kwargs):
    r = requests.request(method, f"{API}{path}", headers=HEADERS, timeout=20, **kwargs)
    r.raise_for_status()
    return r.json()


def main():
    session_id = f"smoke-{uuid.uuid4().hex[:8]}"
    print(f"[smoke] {API} session={session_id}")
    print("[smoke] health:", call("GET", "/health"))
    print("[smoke] categories:", ", ".join(call("GET", "/categories")))

    first = call("POST", "/analyze", json={"text": "My phone was stolen on the street by a stranger",
                                            "sessionId": session_id})
    print("[smoke] analyze:", first.get("source"), first.get("primary_issue"),
          [m["title"] for m in first.get("matches", [])])

    follow = call("POST", "/analyze", json={"text": "Can I also file the theft complaint online?",
                                             "sessionId": session_id})
    print("[smoke] follow-up:", json.dumps({k: follow.get(k) for k in ("isFollowUp", "urgency_level")}))

    print("[smoke] cyber laws:", len(call("GET", "/laws", params={"category": "Cyber Crime"})))
    print("[smoke] family lawyers:", [x["name"] for x in call("GET", "/lawyers", params={"specialization": "family"})])
    print("[smoke] cleanup:", call("DELETE", f"/sessions/{session_id}"))


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("[smoke] FAILED:", e)
        sys.exit(1)
