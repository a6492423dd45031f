"""JSON-file-backed implementation of ProductRepository.

The whole catalog is one JSON array, read and rewritten in full on
every call. Writes go to a temp file that is then renamed over the
target, so a crash mid-write leaves the previous catalog intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from catalog.domain.exceptions import DomainException, StorageError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# One lock per file, shared by every repository instance in the process.
_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(path, threading.RLock())


def _is_record_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._lock:
            yield

    def next_id(self) -> int:
        records = self._load_raw()
        if not records:
            return 1
        return max(raw["id"] for raw in records) + 1

    def get_by_id(self, product_id: int) -> Product | None:
        for product in self.list_all():
            if product.id == product_id:
                return product
        logger.debug("Product %s not found in %s", product_id, self._file_path)
        return None

    def get_by_code(self, code: str) -> Product | None:
        for product in self.list_all():
            if product.code == code:
                return product
        return None

    def list_all(self) -> list[Product]:
        records = self._load_raw()
        try:
            return [self._to_domain(raw) for raw in records]
        except (KeyError, TypeError, DomainException) as exc:
            logger.error("Malformed product record in %s: %s", self._file_path, exc)
            raise StorageError(
                f"Product store {self._file_path} holds a malformed record"
            ) from exc

    def save(self, product: Product) -> None:
        with self._lock:
            records = self._load_raw()
            if product.id is None:
                product.id = self.next_id()

            # Upsert: replace in place if the id exists, otherwise append
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product))

            self._persist_raw(records)
        logger.info("Saved product %s (%s)", product.id, product.code)

    def delete(self, product_id: int) -> None:
        with self._lock:
            records = self._load_raw()
            remaining = [raw for raw in records if raw["id"] != product_id]
            if len(remaining) == len(records):
                logger.debug("Product %s not found, nothing deleted", product_id)
                return
            self._persist_raw(remaining)
        logger.info("Deleted product %s", product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "description": product.description,
            "price": str(product.price.amount),
            "thumbnail": product.thumbnail,
            "code": product.code,
            "stock": product.stock,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            title=raw["title"],
            description=raw["description"],
            price=Money.of(raw["price"]),
            thumbnail=raw["thumbnail"],
            code=raw["code"],
            stock=raw["stock"],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Cannot read product store %s: %s", self._file_path, exc)
            raise StorageError(
                f"Cannot read product store {self._file_path}"
            ) from exc
        if not isinstance(data, list) or not all(
            isinstance(raw, dict) and _is_record_id(raw.get("id")) for raw in data
        ):
            logger.error("Product store %s is not a list of records", self._file_path)
            raise StorageError(
                f"Product store {self._file_path} is not a list of records"
            )
        return data

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Cannot write product store %s: %s", self._file_path, exc)
            raise StorageError(
                f"Cannot write product store {self._file_path}"
            ) from exc

    def _ensure_file(self) -> None:
        try:
            with self._lock:
                if self._file_path.exists():
                    return
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot create product store %s: %s", self._file_path, exc)
            raise StorageError(
                f"Cannot create product store {self._file_path}"
            ) from exc
        logger.info("Created empty product store at %s", self._file_path)
