"""Sample data for development databases.

Seeding is idempotent: rows that already exist (matched by email or
slug) are left as they are.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth.passwords import hash_password
from storefront.db.models import UserRole
from storefront.db.repositories import CategoryRepository, ProductRepository, UserRepository
from storefront.db.repositories.products import product_slug
from storefront.logging_config import get_logger
from storefront.utils import create_slug

logger = get_logger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "admin123"

SEED_CATEGORIES: List[Dict[str, str]] = [
    {"name": "T-Shirts", "description": "Comfortable and stylish t-shirts for everyday wear"},
    {"name": "Hoodies", "description": "Warm and cozy hoodies for cool weather"},
    {"name": "Accessories", "description": "Stylish accessories to complete your look"},
    {"name": "Shoes", "description": "Comfortable and fashionable footwear"},
]

# "category" is the category slug
SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Classic White T-Shirt",
        "description": "A timeless white t-shirt made from premium cotton. Perfect for any occasion.",
        "price": 29.99,
        "compare_at_price": 39.99,
        "images": ["/images/products/white-tshirt.jpg"],
        "inventory": 100,
        "sku": "TS-001",
        "weight": 0.2,
        "is_featured": True,
        "category": "t-shirts",
    },
    {
        "name": "Black Graphic T-Shirt",
        "description": "Bold graphic design on a comfortable black t-shirt.",
        "price": 34.99,
        "images": ["/images/products/black-graphic-tshirt.jpg"],
        "inventory": 75,
        "sku": "TS-002",
        "weight": 0.22,
        "category": "t-shirts",
    },
    {
        "name": "Premium Hoodie",
        "description": "Luxurious hoodie with fleece lining and adjustable drawstrings.",
        "price": 79.99,
        "compare_at_price": 99.99,
        "images": ["/images/products/premium-hoodie.jpg"],
        "inventory": 50,
        "sku": "HD-001",
        "weight": 0.8,
        "is_featured": True,
        "category": "hoodies",
    },
    {
        "name": "Vintage Cap",
        "description": "Stylish vintage-style cap with adjustable strap.",
        "price": 24.99,
        "images": ["/images/products/vintage-cap.jpg"],
        "inventory": 200,
        "sku": "ACC-001",
        "weight": 0.1,
        "category": "accessories",
    },
]


@dataclass
class SeedResult:
    admin_created: bool = False
    categories_created: List[str] = field(default_factory=list)
    products_created: List[str] = field(default_factory=list)


async def seed_database(
    session: AsyncSession,
    admin_email: str = DEFAULT_ADMIN_EMAIL,
    admin_password: str = DEFAULT_ADMIN_PASSWORD,
    bcrypt_rounds: int = 12,
) -> SeedResult:
    """Create the admin user, sample categories and sample products.

    The caller commits.
    """
    result = SeedResult()

    users = UserRepository(session)
    if await users.get_by_email(admin_email) is None:
        await users.create(
            admin_email,
            hash_password(admin_password, rounds=bcrypt_rounds),
            name="Admin User",
            role=UserRole.ADMIN,
        )
        result.admin_created = True

    categories = CategoryRepository(session)
    category_ids = {}
    for data in SEED_CATEGORIES:
        slug = create_slug(data["name"])
        category = await categories.get_by_slug(slug)
        if category is None:
            category = await categories.create(data["name"], description=data["description"])
            result.categories_created.append(category.slug)
        category_ids[category.slug] = category.id

    products = ProductRepository(session)
    for data in SEED_PRODUCTS:
        data = dict(data)
        category_slug = data.pop("category")
        slug = product_slug(data["name"])
        if await products.exists(slug):
            continue
        product = await products.create(category_id=category_ids[category_slug], **data)
        result.products_created.append(product.slug)

    logger.info(
        "Seed completed",
        extra={
            "admin_created": result.admin_created,
            "categories": len(result.categories_created),
            "products": len(result.products_created),
        },
    )
    return result
