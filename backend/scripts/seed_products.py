#!/usr/bin/env python3
"""
Seed products from a JSON file into the products store.

Accepts a list of entries or an object with an "items" list. Entry keys may be
snake_case or the camelCase used by older exports (serialNumber, isDeleted).
Entries whose serial number is already in the store are skipped, so the script
can be run repeatedly.

Usage:
    python scripts/seed_products.py --file ./mock/products.json [--store assets/products.json]
"""
import json
import argparse
import sys
import os

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import settings
from app.store import init_store
from app.services.product_service import ProductValidationError

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "..", "mock", "products.json")


def _normalize_entry(entry):
    """Return a dict with keys: name, quantity, serial_number, is_deleted"""
    quantity = entry.get("quantity", entry.get("stock"))
    if isinstance(quantity, str) and quantity.strip().isdigit():
        quantity = int(quantity)
    return {
        "name": entry.get("name") or entry.get("title"),
        "quantity": quantity,
        "serial_number": entry.get("serial_number") or entry.get("serialNumber") or entry.get("sku"),
        "is_deleted": entry.get("is_deleted", entry.get("isDeleted", False)),
    }


def seed_from_file(path: str, store_file: str = None):
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict) and isinstance(data.get("items"), list):
        source_list = data["items"]
    elif isinstance(data, list):
        source_list = data
    else:
        source_list = []

    svc = init_store(store_file or settings.PRODUCTS_FILE)
    existing = {p.serial_number for p in svc.get_products(include_deleted=True)}
    created, skipped = 0, 0
    for entry in source_list:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        fields = _normalize_entry(entry)
        if fields["serial_number"] in existing:
            skipped += 1
            continue
        try:
            svc.insert_product(fields)
        except ProductValidationError as e:
            print(f"Skipping {entry!r}: {e.message}")
            skipped += 1
            continue
        existing.add(fields["serial_number"])
        created += 1

    print(f"Seeded products: {created} (skipped {skipped})")
    return created, skipped


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=DEFAULT_SOURCE, help="Path to product json (list or {\"items\": [...]})")
    parser.add_argument("--store", "-s", default=None, help="Products store file (defaults to PRODUCTS_FILE)")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file, args.store)
