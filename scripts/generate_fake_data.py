"""Generate fake marketplace data for testing and development.

This module creates synthetic sellers, stores with delivery zones, and
product listings around a few Nigerian cities, and writes them to the data
directory in the formats the API loads.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_data.py

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_products
        df = generate_products(sellers, products_per_seller=5)
"""

import json
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

# Default configuration constants
DEFAULT_SELLERS_PER_CITY = 4
DEFAULT_PRODUCTS_PER_SELLER = 8
DEFAULT_DAYS_BACK = 90
SECONDS_PER_DAY = 86400

# City centres as (state, latitude, longitude)
CITIES = {
    "Port Harcourt": ("Rivers", 4.8156, 7.0134),
    "Lagos": ("Lagos", 6.5244, 3.3792),
    "Abuja": ("FCT", 9.0765, 7.3986),
    "Enugu": ("Enugu", 6.4584, 7.5464),
}

CATEGORIES = ["fashion", "electronics", "food", "beauty", "home", "services"]
PRODUCT_WORDS = ["Classic", "Premium", "Fresh", "Handmade", "Smart", "Organic"]

# Max offset from the city centre, in degrees (roughly 15 km)
MAX_JITTER_DEGREES = 0.135


def generate_sellers(
    sellers_per_city: int = DEFAULT_SELLERS_PER_CITY,
    seed: Optional[int] = None,
) -> List[Dict]:
    """Generate seller records scattered around each city.

    Args:
        sellers_per_city: Number of sellers per city. Must be positive.
        seed: Optional random seed.

    Returns:
        Seller records with GeoJSON ``[longitude, latitude]`` coordinates.

    Raises:
        ValueError: If sellers_per_city is not positive.
    """
    if sellers_per_city <= 0:
        raise ValueError("sellers_per_city must be positive")

    rng = random.Random(seed)
    sellers = []

    for city, (state, lat, lon) in CITIES.items():
        for i in range(sellers_per_city):
            seller_lat = lat + rng.uniform(-MAX_JITTER_DEGREES, MAX_JITTER_DEGREES)
            seller_lon = lon + rng.uniform(-MAX_JITTER_DEGREES, MAX_JITTER_DEGREES)
            slug = city.lower().replace(" ", "-")
            sellers.append({
                "id": f"seller-{slug}-{i + 1}",
                "type": "seller",
                "name": f"{city} Seller {i + 1}",
                "businessName": f"{city} Traders {i + 1}",
                "address": {
                    "city": city,
                    "state": state,
                    "coordinates": {
                        "type": "Point",
                        "coordinates": [round(seller_lon, 6), round(seller_lat, 6)],
                    },
                },
            })

    return sellers


def generate_store(seller: Dict) -> Dict:
    """Generate a store with one state zone and two radius zones for a seller."""
    lon, lat = seller["address"]["coordinates"]["coordinates"]
    state = seller["address"]["state"]
    city = seller["address"]["city"]
    centre = {"latitude": lat, "longitude": lon, "address": f"{city}, {state} State"}

    return {
        "id": seller["id"].replace("seller-", "store-"),
        "name": seller["businessName"],
        "seller": seller["id"],
        "shipping": {
            "enabled": True,
            "zones": [
                {
                    "id": "zone-state",
                    "name": f"{state} State Delivery",
                    "deliveryType": "state-based",
                    "states": [state],
                    "cost": 1500,
                    "estimatedDays": "1-2 days",
                    "isActive": True,
                },
                {
                    "id": "zone-local",
                    "name": "Local Delivery (50km)",
                    "deliveryType": "radius-based",
                    "location": centre,
                    "radius": 50,
                    "cost": 1000,
                    "estimatedDays": "1 day",
                    "isActive": True,
                },
                {
                    "id": "zone-extended",
                    "name": "Extended Delivery (100km)",
                    "deliveryType": "radius-based",
                    "location": centre,
                    "radius": 100,
                    "cost": 2000,
                    "estimatedDays": "2-3 days",
                    "isActive": True,
                },
            ],
        },
    }


def generate_products(
    sellers: List[Dict],
    products_per_seller: int = DEFAULT_PRODUCTS_PER_SELLER,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate product listings for the given sellers.

    Args:
        sellers: Seller records from :func:`generate_sellers`.
        products_per_seller: Listings per seller. Must be positive.
        seed: Optional random seed.

    Returns:
        DataFrame with columns id, seller, name, description, category,
        price, rating, status and created_at, newest first.
    """
    if products_per_seller <= 0:
        raise ValueError("products_per_seller must be positive")

    rng = random.Random(seed)
    end_date = datetime.now()
    start_date = end_date - timedelta(days=DEFAULT_DAYS_BACK)

    products = []
    for seller in sellers:
        for _ in range(products_per_seller):
            category = rng.choice(CATEGORIES)
            name = f"{rng.choice(PRODUCT_WORDS)} {category.title()} Item"
            created_at = start_date + timedelta(
                days=rng.randrange(DEFAULT_DAYS_BACK),
                seconds=rng.randrange(SECONDS_PER_DAY),
            )
            products.append({
                "id": f"prod-{len(products) + 1}",
                "seller": seller["id"],
                "name": name,
                "description": f"{name} from {seller['businessName']}",
                "category": category,
                "price": round(rng.uniform(500, 50000), 2),
                "rating": round(rng.uniform(0, 5), 1),
                "status": "active" if rng.random() > 0.1 else "draft",
                "created_at": created_at.isoformat(),
            })

    df = pd.DataFrame(products)
    df = df.sort_values("created_at", ascending=False).reset_index(drop=True)

    return df


def main() -> None:
    """Generate sellers, stores and products and save them to data/."""
    print("Generating fake marketplace data...")

    try:
        sellers = generate_sellers(seed=42)
        products = generate_products(sellers, seed=42)
    except ValueError as e:
        print(f"Error generating data: {e}")
        return

    stores = [generate_store(seller) for seller in sellers]

    data_dir = Path(__file__).parent.parent / "data"
    data_dir.mkdir(exist_ok=True)

    with open(data_dir / "sellers.json", "w", encoding="utf-8") as f:
        json.dump(sellers, f, indent=2)
    with open(data_dir / "stores.json", "w", encoding="utf-8") as f:
        json.dump(stores, f, indent=2)
    products.to_csv(data_dir / "products.csv", index=False)

    print(f"\nData generated successfully in {data_dir}")
    print(f"  Sellers: {len(sellers)}")
    print(f"  Stores: {len(stores)}")
    print(f"  Products: {len(products)}")
    print(f"  Active products: {(products['status'] == 'active').sum()}")


if __name__ == "__main__":
    main()
