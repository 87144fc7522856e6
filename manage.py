#!/usr/bin/env python3
"""
Database management commands.
Creates tables, bootstraps the superadmin account and loads sample listings.
"""

import asyncio
import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

# Add the app directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from app.config import settings
from app.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
from app.models.user import UserRole
from app.models.facility import FacilityType
from app.models.property import PropertyStatus, PropertyCategory, PropertyType
from app.repositories.user import UserRepository
from app.schemas.facility import FacilityCreate
from app.schemas.property import PropertyCreate
from app.services.facility import FacilityService
from app.services.property import PropertyService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


SAMPLE_PROPERTIES = [
    {
        "title": "Spacious 3BHK Apartment in Greater Kailash",
        "description": "Corner apartment with park view, modular kitchen and covered parking.",
        "status": PropertyStatus.SALE,
        "category": PropertyCategory.RESIDENTIAL,
        "property_type": PropertyType.APARTMENT,
        "sub_type": "3bhk",
        "area": 1850,
        "price": 42500000,
        "bedrooms": 3,
        "bathrooms": 3,
        "balconies": 2,
        "furnished_status": "semi-furnished",
        "parking": "car",
        "facing": "park",
        "address": "M Block, Greater Kailash II, New Delhi",
        "latitude": "28.5355",
        "longitude": "77.2410",
        "facilities": [
            {"facility_name": "Greater Kailash Metro Station", "facility_type": FacilityType.METRO,
             "latitude": "28.5418", "longitude": "77.2381"},
            {"facility_name": "Max Super Speciality Hospital", "facility_type": FacilityType.HOSPITAL,
             "distance": "2.5 km"},
            {"facility_name": "M Block Market", "facility_type": FacilityType.MARKET, "distance": "300 m"},
        ],
    },
    {
        "title": "Independent House for Rent in Defence Colony",
        "description": "Two-storey house with terrace garden, servant quarter and power backup.",
        "status": PropertyStatus.RENT,
        "category": PropertyCategory.RESIDENTIAL,
        "property_type": PropertyType.INDEPENDENT_HOUSE,
        "sub_type": "4bhk",
        "area": 300,
        "area_unit": "sq_yd",
        "price": 350000,
        "bedrooms": 4,
        "bathrooms": 4,
        "furnished_status": "furnished",
        "parking": "both",
        "facing": "east",
        "address": "Defence Colony, New Delhi",
        "latitude": "28.5744",
        "longitude": "77.2310",
        "facilities": [
            {"facility_name": "Delhi Public School", "facility_type": FacilityType.SCHOOL, "distance": "1.2 km"},
            {"facility_name": "Lajpat Nagar Metro Station", "facility_type": FacilityType.METRO,
             "distance_value": 1800},
        ],
    },
    {
        "title": "Ground Floor Shop in Lajpat Nagar Market",
        "description": "High-footfall retail space on the main market road.",
        "status": PropertyStatus.SALE,
        "category": PropertyCategory.COMMERCIAL,
        "property_type": PropertyType.SHOP,
        "area": 450,
        "price": 18000000,
        "address": "Central Market, Lajpat Nagar II, New Delhi",
        "facilities": [
            {"facility_name": "Bus Stop Lajpat Nagar", "facility_type": FacilityType.BUS_STOP, "distance": "100 m"},
        ],
    },
]


class ManagementCommands:
    """Database setup and maintenance commands."""

    async def init_db(self) -> None:
        """Create all tables."""
        logger.info("Creating database tables")
        await create_tables()

    async def create_admin(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None
    ) -> None:
        """
        Create the bootstrap superadmin.
        Does nothing when the username already exists.
        """
        username = username or settings.bootstrap_admin_username
        email = email or settings.bootstrap_admin_email
        password = password or settings.bootstrap_admin_password
        if not password:
            raise RuntimeError("Set BOOTSTRAP_ADMIN_PASSWORD or pass --password")

        async with AsyncSessionLocal() as session:
            user_repo = UserRepository(session)
            if await user_repo.get_by_username(username):
                logger.info(f"User {username} already exists, skipping")
                return

            await user_repo.create_user({
                "username": username,
                "email": email,
                "password": password,
                "role": UserRole.SUPERADMIN,
            })
            logger.info(f"Superadmin created: {username} <{email}>")

    async def seed_database(self) -> None:
        """Load sample listings with nearby facilities."""
        logger.info("Seeding database with sample listings")

        async with AsyncSessionLocal() as session:
            property_service = PropertyService(session)
            facility_service = FacilityService(session)

            existing = await property_service.property_repo.count()
            if existing:
                logger.info(f"{existing} properties already present, skipping seed")
                return

            for sample in SAMPLE_PROPERTIES:
                data = dict(sample)
                facilities = data.pop("facilities", [])
                property_obj = await property_service.create_property(PropertyCreate.model_validate(data))
                for facility in facilities:
                    await facility_service.create_facility(property_obj.id, FacilityCreate.model_validate(facility))
                logger.info(f"Seeded {property_obj.slug} with {len(facilities)} facilities")

        logger.info("Database seeded successfully")

    async def reset_database(self) -> None:
        """Drop and recreate all tables. Development and testing only."""
        logger.warning("Resetting database - all data will be lost!")
        await drop_tables()
        await create_tables()
        logger.info("Database reset completed")


def main():
    """Command line interface for database management."""
    parser = argparse.ArgumentParser(description="Realty Listings database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create the bootstrap superadmin")
    admin_parser.add_argument("--username", help="Defaults to BOOTSTRAP_ADMIN_USERNAME")
    admin_parser.add_argument("--email", help="Defaults to BOOTSTRAP_ADMIN_EMAIL")
    admin_parser.add_argument("--password", help="Defaults to BOOTSTRAP_ADMIN_PASSWORD")

    subparsers.add_parser("seed", help="Load sample listings")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    commands = ManagementCommands()

    async def run(coro):
        try:
            await coro
        finally:
            await close_db_connection()

    try:
        if args.command == "init-db":
            asyncio.run(run(commands.init_db()))

        elif args.command == "create-admin":
            asyncio.run(run(commands.create_admin(args.username, args.email, args.password)))

        elif args.command == "seed":
            asyncio.run(run(commands.seed_database()))

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(run(commands.reset_database()))

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
