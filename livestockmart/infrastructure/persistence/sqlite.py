import json
import logging
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

from ...domain.errors import DuplicateEmail, StoreError
from ...domain.models import (
    Address,
    CartEntry,
    Livestock,
    LivestockType,
    Order,
    OrderItem,
    OrderStatus,
    User,
)
from ...domain.ports.persistence import PersistenceGateway

logger = logging.getLogger(__name__)


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway.

    Saved user state (cart, wishlist, addresses) and order snapshots are stored
    as JSON documents inside their owning row.
    """

    # Stays under SQLITE_MAX_VARIABLE_NUMBER on older builds (999).
    IN_CLAUSE_BATCH = 500

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    cart TEXT NOT NULL DEFAULT '[]',
                    wishlist TEXT NOT NULL DEFAULT '[]',
                    addresses TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS livestock (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    type TEXT NOT NULL,
                    breed TEXT NOT NULL DEFAULT '',
                    age REAL NOT NULL DEFAULT 0,
                    price REAL NOT NULL,
                    image TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS orders (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    items TEXT NOT NULL,
                    total REAL NOT NULL,
                    status TEXT NOT NULL,
                    date TEXT NOT NULL,
                    address TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(user_id) REFERENCES users(id)
                );

                CREATE INDEX IF NOT EXISTS idx_orders_user_created
                    ON orders(user_id, created_at DESC);
                """
            )

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as exc:
                logger.exception("SQLite operation failed")
                raise StoreError() from exc

    # UserRepository API ----------------------------------------------------
    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
            ).fetchone()
        return self._row_to_user(row) if row else None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row else None

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        user_id = self._new_id()
        now = self._now()
        with self._lock:
            try:
                with self._conn:
                    self._conn.execute(
                        """
                        INSERT INTO users (id, name, email, password_hash, created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        (user_id, name, email.strip().lower(), password_hash, now, now),
                    )
                    row = self._conn.execute(
                        "SELECT * FROM users WHERE id = ?", (user_id,)
                    ).fetchone()
            except sqlite3.IntegrityError as exc:
                if "users.email" in str(exc):
                    raise DuplicateEmail() from exc
                logger.exception("Failed to insert user")
                raise StoreError() from exc
            except sqlite3.Error as exc:
                logger.exception("SQLite operation failed")
                raise StoreError() from exc
        if not row:
            raise StoreError("Failed to persist user.")
        return self._row_to_user(row)

    def update_user_state(
        self,
        user_id: str,
        *,
        cart: Optional[List[CartEntry]] = None,
        wishlist: Optional[List[str]] = None,
        addresses: Optional[List[Address]] = None,
    ) -> Optional[User]:
        updates = []
        params: List[Any] = []
        if cart is not None:
            updates.append("cart = ?")
            params.append(self._dump([asdict(entry) for entry in cart]))
        if wishlist is not None:
            updates.append("wishlist = ?")
            params.append(self._dump(list(wishlist)))
        if addresses is not None:
            updates.append("addresses = ?")
            params.append(self._dump([asdict(address) for address in addresses]))

        with self._transaction() as conn:
            if updates:
                updates.append("updated_at = ?")
                params.append(self._now())
                params.append(user_id)
                conn.execute(f"UPDATE users SET {', '.join(updates)} WHERE id = ?", params)
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row else None

    # LivestockRepository API -----------------------------------------------
    def create_livestock(
        self,
        name: str,
        type: LivestockType,
        breed: str,
        age: float,
        price: float,
        image: str,
    ) -> Livestock:
        livestock_id = self._new_id()
        now = self._now()
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO livestock (id, name, type, breed, age, price, image, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (livestock_id, name, type.value, breed, age, price, image, now, now),
            )
            row = conn.execute("SELECT * FROM livestock WHERE id = ?", (livestock_id,)).fetchone()
        if not row:
            raise StoreError("Failed to persist livestock.")
        return self._row_to_livestock(row)

    def get_livestock(self, livestock_id: str) -> Optional[Livestock]:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM livestock WHERE id = ?", (livestock_id,)).fetchone()
        return self._row_to_livestock(row) if row else None

    def get_livestock_many(self, livestock_ids: Iterable[str]) -> List[Livestock]:
        ids = list(dict.fromkeys(livestock_ids))
        if not ids:
            return []
        rows: List[sqlite3.Row] = []
        with self._transaction() as conn:
            for start in range(0, len(ids), self.IN_CLAUSE_BATCH):
                batch = ids[start : start + self.IN_CLAUSE_BATCH]
                placeholders = ", ".join("?" for _ in batch)
                rows.extend(
                    conn.execute(
                        f"SELECT * FROM livestock WHERE id IN ({placeholders})", batch
                    ).fetchall()
                )
        return [self._row_to_livestock(row) for row in rows]

    def list_livestock(self) -> List[Livestock]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM livestock ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [self._row_to_livestock(row) for row in rows]

    def delete_livestock(self, livestock_id: str) -> bool:
        with self._transaction() as conn:
            cur = conn.execute("DELETE FROM livestock WHERE id = ?", (livestock_id,))
            return cur.rowcount > 0

    # OrderRepository API ---------------------------------------------------
    def create_order(
        self,
        user_id: str,
        items: List[OrderItem],
        total: float,
        status: OrderStatus,
        date: str,
        address: Address,
    ) -> Order:
        order_id = self._new_id()
        now = self._now()
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO orders (
                    id, user_id, items, total, status, date, address, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order_id,
                    user_id,
                    self._dump([asdict(item) for item in items]),
                    total,
                    status.value,
                    date,
                    self._dump(asdict(address)),
                    now,
                    now,
                ),
            )
            row = conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,)).fetchone()
        if not row:
            raise StoreError("Failed to persist order.")
        return self._row_to_order(row)

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,)).fetchone()
        return self._row_to_order(row) if row else None

    def get_orders_for_user(self, user_id: str) -> List[Order]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM orders WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            ).fetchall()
        return [self._row_to_order(row) for row in rows]

    def update_order_status(
        self, order_id: str, status: OrderStatus, *, expected: OrderStatus
    ) -> Optional[Order]:
        with self._transaction() as conn:
            conn.execute(
                "UPDATE orders SET status = ?, updated_at = ? WHERE id = ? AND status = ?",
                (status.value, self._now(), order_id, expected.value),
            )
            row = conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,)).fetchone()
        return self._row_to_order(row) if row else None

    # Helpers ----------------------------------------------------------------
    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _dump(value: Any) -> str:
        return json.dumps(value, ensure_ascii=False)

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        result = datetime.fromisoformat(value)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            cart=[
                CartEntry(livestock_id=entry["livestock_id"], selected=bool(entry.get("selected", True)))
                for entry in json.loads(row["cart"])
            ],
            wishlist=[str(item) for item in json.loads(row["wishlist"])],
            addresses=[Address(**address) for address in json.loads(row["addresses"])],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_livestock(self, row: sqlite3.Row) -> Livestock:
        return Livestock(
            id=row["id"],
            name=row["name"],
            type=LivestockType(row["type"]),
            breed=row["breed"],
            age=row["age"],
            price=row["price"],
            image=row["image"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_order(self, row: sqlite3.Row) -> Order:
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            items=[OrderItem(**item) for item in json.loads(row["items"])],
            total=row["total"],
            status=OrderStatus(row["status"]),
            date=row["date"],
            address=Address(**json.loads(row["address"])),
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )
