"""
Auth persistence helpers.
"""

from __future__ import annotations

from uuid import UUID

from equity_coffee.core import db

PUBLIC_USER_COLUMNS = """
    id, email, role, first_name, last_name, company_name, phone, country, created_at
"""


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(
    *,
    email: str,
    password_hash: str,
    role: str,
    first_name: str | None = None,
    last_name: str | None = None,
    company_name: str | None = None,
    country: str | None = None,
    phone: str | None = None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (email, password_hash, role, first_name, last_name, company_name, country, phone)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {PUBLIC_USER_COLUMNS}
        """,
        normalize_email(email),
        password_hash,
        role,
        first_name,
        last_name,
        company_name,
        country,
        phone,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_USER_COLUMNS}, password_hash
        FROM users
        WHERE email = $1
        LIMIT 1
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: UUID) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def touch_last_login(user_id: UUID) -> None:
    await db.execute(
        """
        UPDATE users
        SET last_login_at = CURRENT_TIMESTAMP
        WHERE id = $1
        """,
        user_id,
    )


async def update_password_hash(user_id: UUID, password_hash: str) -> int:
    return await db.execute(
        """
        UPDATE users
        SET password_hash = $1,
            updated_at = CURRENT_TIMESTAMP
        WHERE id = $2
        """,
        password_hash,
        user_id,
    )
