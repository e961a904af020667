import json
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts")))

from seed_products import seed_from_file  # noqa: E402

from app.repositories.product_repo import ProductRepository


def test_seed_accepts_camel_case_and_skips_duplicates(tmp_path):
    source = tmp_path / "source.json"
    source.write_text(
        json.dumps(
            {
                "items": [
                    {"name": "Drill", "quantity": 2, "serialNumber": "D-1"},
                    {"name": "Saw", "quantity": "3", "serial_number": "S-1", "isDeleted": True},
                    {"name": "Drill again", "quantity": 1, "serialNumber": "D-1"},
                    {"name": "", "quantity": 1, "serialNumber": "X-1"},
                ]
            }
        ),
        encoding="utf-8",
    )
    store_file = str(tmp_path / "seeded.json")

    assert seed_from_file(str(source), store_file) == (2, 2)
    # second run finds everything already present
    assert seed_from_file(str(source), store_file) == (0, 4)

    repo = ProductRepository(store_file)
    repo.load()
    by_serial = {p.serial_number: p for p in repo.all()}
    assert by_serial["D-1"].name == "Drill"
    assert by_serial["S-1"].quantity == 3
    assert by_serial["S-1"].is_deleted is True


def test_seed_skips_non_boolean_deleted_flag(tmp_path):
    source = tmp_path / "source.json"
    source.write_text(
        json.dumps(
            [
                {"name": "Anvil", "quantity": 1, "serialNumber": "A-1", "isDeleted": "false"},
                {"name": "Bench", "quantity": 1, "serialNumber": "B-1", "isDeleted": False},
            ]
        ),
        encoding="utf-8",
    )
    store_file = str(tmp_path / "seeded.json")

    assert seed_from_file(str(source), store_file) == (1, 1)

    repo = ProductRepository(store_file)
    repo.load()
    assert [(p.serial_number, p.is_deleted) for p in repo.all()] == [("B-1", False)]
