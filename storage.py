"""
JSON file store for purchases and investments.

The whole document is loaded and saved wholesale; there is no partial
update on disk. A missing file is created empty on first load.
"""

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Optional

from config import DATA_FILE
from models import FinancialData, Investment, Purchase, utcnow

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The data file exists but can't be read back into records."""


def new_id() -> str:
    return str(uuid.uuid4())


class Storage:
    def __init__(self, path: Path = DATA_FILE):
        self.path = Path(path)

    def load(self) -> FinancialData:
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, creating an empty one")
            data = FinancialData()
            self.save(data)
            return data
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return FinancialData.from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageError(f"Cannot read data file {self.path}: {e}") from e

    def save(self, data: FinancialData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data.last_updated = utcnow()
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved {len(data.purchases)} purchases, "
                     f"{len(data.investments)} investments to {self.path}")

    # ── Purchases ───────────────────────────────────────────────────────────

    def add_purchase(self, purchase: Purchase) -> None:
        data = self.load()
        data.purchases.append(purchase)
        self.save(data)
        logger.info(f"Added purchase {purchase.id} ({purchase.name})")

    def get_purchase(self, purchase_id: str) -> Optional[Purchase]:
        return next((p for p in self.load().purchases if p.id == purchase_id), None)

    def update_purchase(self, purchase_id: str, **changes) -> Optional[Purchase]:
        """Replace fields of a stored purchase; None when the id is unknown."""
        data = self.load()
        for idx, p in enumerate(data.purchases):
            if p.id == purchase_id:
                updated = replace(p, **changes)
                data.purchases[idx] = updated
                self.save(data)
                logger.info(f"Updated purchase {purchase_id}: {', '.join(changes)}")
                return updated
        return None

    def delete_purchase(self, purchase_id: str) -> bool:
        data = self.load()
        kept = [p for p in data.purchases if p.id != purchase_id]
        if len(kept) == len(data.purchases):
            return False
        data.purchases = kept
        self.save(data)
        logger.info(f"Deleted purchase {purchase_id}")
        return True

    # ── Investments ─────────────────────────────────────────────────────────

    def add_investment(self, investment: Investment) -> None:
        data = self.load()
        data.investments.append(investment)
        self.save(data)
        logger.info(f"Added investment {investment.id} ({investment.name})")

    def get_investment(self, investment_id: str) -> Optional[Investment]:
        return next((i for i in self.load().investments if i.id == investment_id), None)

    def delete_investment(self, investment_id: str) -> bool:
        data = self.load()
        kept = [i for i in data.investments if i.id != investment_id]
        if len(kept) == len(data.investments):
            return False
        data.investments = kept
        self.save(data)
        logger.info(f"Deleted investment {investment_id}")
        return True
