"""Seed script: global admin, a demo customer with its admin, demo products.

Prints development tokens for the two admins.
"""
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal, init_db
from app.models.customer import Customer
from app.models.product import Product
from app.models.user import User, UserRole
from app.routers.auth import get_password_hash, token_for_user

DEMO_PRODUCTS = [
    ("Acme", "Rocket Skates", "Skates with a rocket strapped on.", "ACME-RS-01"),
    ("Acme", "Giant Magnet", "Attracts anything metallic.", "ACME-GM-02"),
    ("Globex", "Hammock", "Two-person outdoor hammock.", "GLX-HM-01"),
    ("Initech", "Stapler", "Red swingline stapler.", "INI-ST-01"),
]


def get_or_create_user(db, username: str, password: str, roles: list[str], customer_id: int | None) -> User:
    user = db.query(User).filter(User.username == username).first()
    if user:
        print(f"User already exists: {username} ({user.id})")
        return user

    user = User(
        username=username,
        email=f"{username}@catalog.local",
        hashed_password=get_password_hash(password),
        roles=roles,
        customer_id=customer_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    print(f"Created user: {username} ({user.id})")
    print(f"  Password: {password}")
    return user


def seed_database():
    """Create initial customer, admins and products."""
    init_db()
    db = SessionLocal()

    try:
        customer = db.query(Customer).filter(Customer.slug == "demo-company").first()
        if not customer:
            print("Creating demo customer...")
            customer = Customer(name="Demo Company")
            customer.compute_slug()
            db.add(customer)
            db.commit()
            db.refresh(customer)
        print(f"Customer: {customer.id} ({customer.slug})")

        admin = get_or_create_user(db, "admin", "admin1234", [UserRole.GLOBAL_ADMIN.value], None)
        company_admin = get_or_create_user(
            db, "companyadmin", "company1234", [UserRole.TENANT_ADMIN.value], customer.id
        )

        if db.query(Product).count() == 0:
            for brand, name, description, reference in DEMO_PRODUCTS:
                db.add(Product(brand=brand, name=name, description=description, reference=reference))
            db.commit()
            print(f"Created {len(DEMO_PRODUCTS)} products")

        print("\nDevelopment tokens:")
        print(f"  admin:        {token_for_user(admin)}")
        print(f"  companyadmin: {token_for_user(company_admin)}")
        print("\nSeed completed successfully!")

    except Exception as e:
        print(f"Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
