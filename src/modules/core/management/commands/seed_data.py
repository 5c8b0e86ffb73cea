from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.products.models import Product

SEED_PRODUCTS = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "price": 75,
        "description": "Relaxed fit crew neck in a heavyweight cotton blend.",
        "stock": 7,
        "size": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tag": ["sweatshirt"],
    },
    {
        "title": "Men's Quilted Shirt Jacket",
        "price": 200,
        "description": "Quilted shirt jacket with a water-repellent finish.",
        "stock": 5,
        "size": ["XS", "S", "M", "XL", "XXL"],
        "gender": "men",
        "tag": ["jacket"],
    },
    {
        "title": "Women's Cropped Puffer Jacket",
        "price": 225,
        "description": "Cropped silhouette with a lightweight recycled fill.",
        "stock": 85,
        "size": ["XS", "S", "M"],
        "gender": "women",
        "tag": ["hoodie"],
    },
    {
        "title": "Kids Cybertruck Graffiti Hoodie",
        "price": 30,
        "description": "Soft fleece hoodie with a graffiti-style print.",
        "stock": 10,
        "size": ["XS", "S", "M"],
        "gender": "kid",
        "tag": ["shirt"],
    },
    {
        "title": "Unisex `Turbine` Cap",
        "price": 35,
        "description": None,
        "stock": 20,
        "size": ["S", "M"],
        "gender": "unisex",
        "tag": [],
    },
]


class Command(BaseCommand):
    help = "Seed database with demo products and an admin user."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        products_created = self._seed_products()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={products_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_products(self) -> int:
        self.stdout.write("Creating products...")
        created = 0
        for data in SEED_PRODUCTS:
            fields = dict(data)
            _, was_created = Product.objects.get_or_create(
                title=fields.pop("title"), defaults=fields
            )
            created += int(was_created)
        return created
