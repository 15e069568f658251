# scripts/set_role.py
# Usage: python -m scripts.set_role someone@example.com admin
import asyncio
import sys
from datetime import datetime, timezone
from db.db_operation import mongo_conn

ROLES = ("user", "admin", "superadmin")

async def set_role(email: str, role: str):
    if role not in ROLES:
        raise SystemExit(f"role must be one of {ROLES}")
    users = mongo_conn.users_collection
    # bump token_version so tokens carrying the old role stop working
    result = await users.update_one(
        {"email": email},
        {"$set": {"role": role, "updated_at": datetime.now(timezone.utc)}, "$inc": {"token_version": 1}}
    )
    if result.matched_count == 0:
        print("User not found:", email)
        return
    await mongo_conn.audit_logs.insert_one({
        "actor_id": "cli",
        "action": "change_role",
        "resource_type": "user",
        "resource_id": email,
        "after": {"role": role},
        "timestamp": datetime.now(timezone.utc)
    })
    print(f"{email} is now {role}")

if __name__ == "__main__":
    if len(sys.argv) != 3:
        raise SystemExit("usage: python -m scripts.set_role EMAIL ROLE")
    asyncio.run(set_role(sys.argv[1], sys.argv[2]))
