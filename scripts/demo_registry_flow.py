"""Demo: authorize → issue → verify → revoke using FastAPI TestClient.

Run with:
    python scripts/demo_registry_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.core.config import SETTINGS
from app.main import app
from app.services.token_service import create_access_token

INSTITUTION = "beta-college"


def _auth(principal: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(sub=principal)}"}


def main() -> None:
    client = TestClient(app)
    admin = _auth(SETTINGS.registry_admin)
    issuer = _auth(INSTITUTION)

    # ── Step 1: administrator authorizes the institution ───────────
    r = client.post(
        "/v1/institutions",
        json={"institution": INSTITUTION, "name": "Beta College"},
        headers=admin,
    )
    print(f"1. POST /v1/institutions   → {r.status_code}  {r.json()}")

    # ── Step 2: institution issues a credential ────────────────────
    r = client.post(
        "/v1/credentials",
        json={
            "student_name": "Jane Doe",
            "degree": "BSc",
            "field_of_study": "CS",
            "graduation_year": 2023,
            "document_ref": "doc123",
        },
        headers=issuer,
    )
    credential_id = r.json()["id"]
    print(f"2. POST /v1/credentials    → {r.status_code}  id={credential_id}")

    # ── Step 3: anyone verifies ────────────────────────────────────
    r = client.get(f"/v1/credentials/{credential_id}/verify")
    print(f"3. GET  /verify            → {r.status_code}  {r.json()}")

    # ── Step 4: an outsider tries to revoke ────────────────────────
    r = client.post(f"/v1/credentials/{credential_id}/revoke", headers=_auth("x"))
    print(f"4. POST /revoke (outsider) → {r.status_code}  {r.json()['detail']}")

    # ── Step 5: issuer revokes ─────────────────────────────────────
    r = client.post(f"/v1/credentials/{credential_id}/revoke", headers=issuer)
    print(f"5. POST /revoke (issuer)   → {r.status_code}")

    # ── Step 6: verify again ───────────────────────────────────────
    r = client.get(f"/v1/credentials/{credential_id}/verify")
    print(f"6. GET  /verify            → {r.status_code}  valid={r.json()['valid']}")

    # ── Step 7: notification feed ──────────────────────────────────
    r = client.get("/v1/events")
    print(f"7. GET  /v1/events         → {[e['name'] for e in r.json()]}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()
