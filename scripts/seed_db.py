"""Seed the configured database with demo users, customers and invoices.

Usage:
    python -m scripts.seed_db --users 3 --customers 25 --invoices 60 --max-rows 5

Every seeded account uses the password printed at the end of the run.
"""

from __future__ import annotations

import argparse
import logging
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app import models
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.models.enums import CustomerStatus, InvoiceStatus
from app.services.credentials import hash_secret
from app.services.invoice_math import recalculate

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Demo1234!"
SERVICES = ["Consulting", "Design", "Development", "Hosting", "Support", "Training", "Audit"]
FIRST_NAMES = ["Aylin", "Kamran", "Leyla", "Murad", "Nigar", "Orkhan", "Sabina", "Tural"]
LAST_NAMES = ["Aliyev", "Hasanova", "Guliyev", "Mammadova", "Huseynov", "Ismayilova"]


def _person(rng: random.Random, index: int, domain: str) -> tuple[str, str]:
    name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
    email = f"{name.lower().replace(' ', '.')}.{index}@{domain}"
    return name, email


def seed(users: int, customers: int, invoices: int, max_rows: int, rng: random.Random) -> None:
    password_hash = hash_secret(DEMO_PASSWORD)
    now = datetime.now(timezone.utc)

    with SessionLocal() as session:
        seeded_users: list[models.User] = []
        for index in range(users):
            name, email = _person(rng, index, "example.com")
            seeded_users.append(models.User(name=name, email=email, password_hash=password_hash))
        session.add_all(seeded_users)
        session.flush()

        seeded_customers: list[models.Customer] = []
        for index in range(customers):
            name, email = _person(rng, index, "customer.example.com")
            customer = models.Customer(
                name=name,
                email=email,
                password_hash=password_hash,
                status=rng.choice(list(CustomerStatus)),
            )
            session.add(customer)
            session.flush()
            owner = rng.choice(seeded_users)
            session.add(models.UserCustomerRelation(user_id=owner.id, customer_id=customer.id))
            seeded_customers.append(customer)

        for _ in range(invoices if seeded_customers else 0):
            start = now - timedelta(days=rng.randint(30, 365))
            invoice = models.Invoice(
                customer_id=rng.choice(seeded_customers).id,
                start_date=start,
                end_date=start + timedelta(days=rng.randint(1, 30)),
                comment=f"{rng.choice(SERVICES)} work for {start:%B %Y}",
                status=rng.choice(list(InvoiceStatus)),
            )
            invoice.rows = [
                models.InvoiceRow(
                    service=rng.choice(SERVICES),
                    quantity=Decimal(rng.randint(1, 40)),
                    amount=Decimal(rng.randint(500, 20000)) / 100,
                )
                for _ in range(rng.randint(1, max_rows))
            ]
            recalculate(invoice)
            session.add(invoice)

        session.commit()
        logger.info(
            "Seeded %s users, %s customers and %s invoices",
            len(seeded_users),
            len(seeded_customers),
            invoices if seeded_customers else 0,
        )

    for user in seeded_users:
        print(f"{user.email} / {DEMO_PASSWORD}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--users", type=int, default=2)
    parser.add_argument("--customers", type=int, default=20)
    parser.add_argument("--invoices", type=int, default=40)
    parser.add_argument("--max-rows", type=int, default=5)
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible data")
    args = parser.parse_args()

    if args.users < 1:
        parser.error("--users must be at least 1")
    if args.max_rows < 1:
        parser.error("--max-rows must be at least 1")

    configure_logging(get_settings())
    seed(args.users, args.customers, args.invoices, args.max_rows, random.Random(args.seed))


if __name__ == "__main__":
    main()
