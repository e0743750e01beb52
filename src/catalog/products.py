"""Product catalog data source.

Products are held in a pandas DataFrame and filtered the way the product
listing pages filter them: by seller, status, category, price, rating and
free text, sorted by rating and then by recency.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pydantic import BaseModel, Field

from src.api.exceptions import DataSourceError

# Configure module logger
logger = logging.getLogger(__name__)

ACTIVE_STATUS = "active"

REQUIRED_COLUMNS = {"id", "seller", "name", "price"}

# Optional columns and their fill values
DEFAULT_COLUMNS: Dict[str, Any] = {
    "description": "",
    "category": "",
    "rating": 0.0,
    "status": ACTIVE_STATUS,
    "created_at": None,
}


class ProductFilters(BaseModel):
    """Optional product filters applied on top of the seller filter."""

    category: Optional[str] = Field(
        default=None, description="Case-insensitive category substring"
    )
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    rating: Optional[float] = Field(
        default=None, ge=0, le=5, description="Minimum average rating"
    )
    search: Optional[str] = Field(
        default=None, description="Text searched in name and description"
    )


class ProductPage(BaseModel):
    """One page of products and the total number of matches."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0


def _prepare_frame(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Product data missing required columns: {missing}")

    df = df.copy()
    for column, default in DEFAULT_COLUMNS.items():
        if column not in df.columns:
            df[column] = default

    df["id"] = df["id"].astype(str)
    df["seller"] = df["seller"].astype(str)
    df["name"] = df["name"].fillna("").astype(str)
    df["description"] = df["description"].fillna("").astype(str)
    df["category"] = df["category"].fillna("").astype(str)
    df["status"] = df["status"].fillna(ACTIVE_STATUS).astype(str)
    df["price"] = pd.to_numeric(df["price"], errors="coerce").astype(float)
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0.0).astype(float)
    df["created_at"] = pd.to_datetime(df["created_at"], errors="coerce", utc=True)

    return df.reset_index(drop=True)


def _to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    out = df.copy()
    out["created_at"] = out["created_at"].map(
        lambda ts: ts.isoformat() if pd.notna(ts) else None
    )
    out = out.astype(object).where(out.notna(), None)
    return out.to_dict(orient="records")


class ProductCatalog:
    """Queryable collection of product listings."""

    def __init__(self, products: pd.DataFrame):
        self._products = _prepare_frame(products)
        logger.info(f"Product catalog ready with {len(self._products)} products")

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "ProductCatalog":
        """Build a catalog from product dictionaries."""
        records = list(records)
        if not records:
            return cls(pd.DataFrame(columns=sorted(REQUIRED_COLUMNS)))
        return cls(pd.DataFrame(records))

    @classmethod
    def from_csv(cls, csv_path: str) -> "ProductCatalog":
        """Load a catalog from a CSV file.

        Raises:
            DataSourceError: If the file is missing or malformed.
        """
        if not Path(csv_path).exists():
            raise DataSourceError(str(csv_path))

        logger.info(f"Loading products from {csv_path}")
        try:
            df = pd.read_csv(csv_path, dtype={"id": str, "seller": str})
            return cls(df)
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error(f"Failed to load products: {e}", exc_info=True)
            raise DataSourceError(str(csv_path), e) from e

    def __len__(self) -> int:
        return len(self._products)

    def find_products(
        self,
        seller_ids: Iterable[str],
        filters: Optional[ProductFilters] = None,
        page: int = 1,
        limit: int = 12,
    ) -> ProductPage:
        """Find active products of the given sellers.

        Args:
            seller_ids: Sellers whose products are eligible.
            filters: Optional category/price/rating/text filters.
            page: 1-based page number.
            limit: Page size.

        Returns:
            ProductPage with the requested page, sorted by average rating
            (highest first) and then creation date (newest first).
        """
        filters = filters or ProductFilters()
        df = self._products
        seller_ids = {str(seller_id) for seller_id in seller_ids}

        mask = df["seller"].isin(seller_ids) & (df["status"] == ACTIVE_STATUS)

        if filters.category:
            mask &= df["category"].str.contains(
                filters.category, case=False, regex=False
            )
        if filters.min_price is not None:
            mask &= df["price"] >= filters.min_price
        if filters.max_price is not None:
            mask &= df["price"] <= filters.max_price
        if filters.rating is not None:
            mask &= df["rating"] >= filters.rating
        if filters.search:
            mask &= df["name"].str.contains(
                filters.search, case=False, regex=False
            ) | df["description"].str.contains(
                filters.search, case=False, regex=False
            )

        matched = df[mask].sort_values(
            ["rating", "created_at"],
            ascending=[False, False],
            na_position="last",
        )

        skip = (max(page, 1) - 1) * limit
        page_df = matched.iloc[skip : skip + limit]

        logger.debug(
            "Products filtered",
            extra={
                "sellers": len(seller_ids),
                "matched": len(matched),
                "returned": len(page_df),
            },
        )

        return ProductPage(items=_to_records(page_df), total=len(matched))
