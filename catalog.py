"""Product catalog: the read-only set of purchasable products for a session."""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

NAME_ALIASES = ("product", "title", "item")
PRICE_ALIASES = ("cost", "amount", "value")


class CatalogLoadError(Exception):
    """The catalog source is missing or malformed."""

    def __init__(self, message: str, source: Any = None):
        super().__init__(message)
        self.source = source


@dataclass(frozen=True)
class Product:
    product_id: Any
    name: str
    price: Decimal


class Catalog:
    """Products in load order. Duplicate names are kept as loaded."""

    def __init__(self, products: Sequence[Product] = ()):
        self._products: Tuple[Product, ...] = tuple(products)

    @classmethod
    def empty(cls) -> "Catalog":
        return cls(())

    @classmethod
    def load(cls, source: Union[str, Path, List[dict], pd.DataFrame]) -> "Catalog":
        """Build a catalog from a JSON/CSV path, a list of records or a DataFrame.

        Raises CatalogLoadError when the source is missing or malformed.
        """
        df = _read_source(source)
        return cls(_products_from_frame(df, source))

    def products(self) -> Tuple[Product, ...]:
        return self._products

    @property
    def is_empty(self) -> bool:
        return not self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __repr__(self) -> str:
        return f"Catalog({len(self._products)} products)"


def load_catalog(source) -> Tuple[Catalog, Optional[CatalogLoadError]]:
    """Load a catalog, degrading to an empty one if the source is unusable.

    The error is returned so the caller can show it once; an empty catalog
    simply means no product can be matched.
    """
    try:
        catalog = Catalog.load(source)
    except CatalogLoadError as e:
        logger.warning("Catalog unavailable, continuing with an empty catalog: %s", e)
        return Catalog.empty(), e
    logger.info("Loaded %d products", len(catalog))
    return catalog, None


def _read_source(source) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        return source.copy()
    if isinstance(source, (list, tuple)):
        try:
            return pd.DataFrame.from_records(list(source))
        except (TypeError, ValueError) as e:
            raise CatalogLoadError(f"invalid product records: {e}", source) from e
    if isinstance(source, (str, Path)):
        return _read_file(Path(source))
    raise CatalogLoadError(f"unsupported catalog source type: {type(source).__name__}", source)


def _read_file(path: Path) -> pd.DataFrame:
    if not path.is_file():
        raise CatalogLoadError(f"{path} does not exist", path)

    if path.suffix.lower() == ".csv":
        try:
            try:
                return pd.read_csv(path, dtype=str, encoding="utf-8")
            except UnicodeDecodeError:
                return pd.read_csv(path, dtype=str, encoding="cp1252", encoding_errors="replace")
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (ValueError, pd.errors.ParserError) as e:
            raise CatalogLoadError(f"{path} is not a valid CSV file: {e}", path) from e

    try:
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False, precise_float=True)
    except ValueError as e:
        raise CatalogLoadError(f"{path} is not a valid JSON product list: {e}", path) from e
    if not isinstance(df, pd.DataFrame):
        raise CatalogLoadError(f"{path} must contain a list of products", path)
    return df


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df.columns = [str(c).strip().lower() for c in df.columns]

    if "name" not in df.columns:
        for cand in NAME_ALIASES:
            if cand in df.columns:
                df = df.rename(columns={cand: "name"})
                break

    if "price" not in df.columns:
        for cand in PRICE_ALIASES:
            if cand in df.columns:
                df = df.rename(columns={cand: "price"})
                break

    return df


def _to_price(raw, row: int, source) -> Decimal:
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        raise CatalogLoadError(f"product #{row} has no price", source)
    try:
        price = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise CatalogLoadError(f"product #{row} has a non-numeric price {raw!r}", source) from e
    if not price.is_finite() or price < 0:
        raise CatalogLoadError(f"product #{row} has an invalid price {raw!r}", source)
    return price


def _products_from_frame(df: pd.DataFrame, source) -> List[Product]:
    if df.empty and len(df.columns) == 0:
        return []

    df = _normalize_columns(df)
    if "name" not in df.columns:
        raise CatalogLoadError("catalog is missing a product name column", source)
    if "price" not in df.columns:
        raise CatalogLoadError("catalog is missing a price column", source)

    products = []
    for pos, rec in enumerate(df.to_dict(orient="records"), start=1):
        raw_name = rec.get("name")
        name = "" if raw_name is None or (isinstance(raw_name, float) and pd.isna(raw_name)) else str(raw_name).strip()
        if not name:
            raise CatalogLoadError(f"product #{pos} has an empty name", source)

        product_id = rec.get("id", pos)
        if product_id is None or (isinstance(product_id, float) and pd.isna(product_id)):
            product_id = pos
        elif isinstance(product_id, float) and product_id.is_integer():
            # a partly missing id column comes back as float
            product_id = int(product_id)

        products.append(Product(product_id=product_id, name=name, price=_to_price(rec.get("price"), pos, source)))
    return products
