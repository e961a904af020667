from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from app.client.product_client import ProductClient, ProductClientError

HELP = "commands: list, search, add, update, delete, undo, quit"


def format_date(value: Optional[str]) -> str:
    """Short date format, e.g. `6/15/24, 9:03 AM`."""
    if not value:
        return ""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{dt.month}/{dt.day}/{dt:%y}, {dt.strftime('%I').lstrip('0')}:{dt:%M %p}"


def validate_form(data: Dict[str, Any], partial: bool = False) -> List[str]:
    """With partial=True only the fields present in `data` are checked."""
    errors = []
    if (not partial or "name" in data) and not data.get("name"):
        errors.append("Name is required")
    if not partial or "quantity" in data:
        quantity = data.get("quantity")
        if quantity is None:
            errors.append("Quantity is required")
        elif quantity < 1:
            errors.append("Quantity must be at least 1")
    if (not partial or "serial_number" in data) and not data.get("serial_number"):
        errors.append("Serial number is required")
    return errors


def render_table(products: List[Dict[str, Any]], title: str = "Products") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim")
    table.add_column("Name", style="green")
    table.add_column("Quantity", justify="right", style="cyan")
    table.add_column("Serial Number", style="blue")
    table.add_column("Created", style="magenta")
    table.add_column("Updated", style="magenta")
    for i, p in enumerate(products, start=1):
        table.add_row(
            str(i),
            p.get("name", ""),
            str(p.get("quantity", "")),
            p.get("serial_number", ""),
            format_date(p.get("created_at")),
            format_date(p.get("updated_at")),
        )
    return table


class InventoryShell:
    """
    Session state behind the interactive product table: the search term,
    a pending delete awaiting confirmation and the id that undo restores.
    """

    def __init__(self, client: ProductClient, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console()
        self.search_term = ""
        self.product_to_delete: Optional[Dict[str, Any]] = None
        self.undo_id = ""
        self.visible: List[Dict[str, Any]] = []
        self._unsubscribe = client.cache.subscribe(self._on_change)

    def _on_change(self, products: List[Dict[str, Any]]) -> None:
        self.visible = self.client.filter_products(self.search_term)

    def close(self) -> None:
        self._unsubscribe()

    def refresh(self) -> None:
        self.client.load_products()

    def search(self, term: str) -> List[Dict[str, Any]]:
        self.search_term = term
        self.visible = self.client.filter_products(term)
        return self.visible

    def show(self) -> None:
        self.console.print(render_table(self.visible))
        if self.undo_id:
            self.console.print("[yellow]Product deleted. Type 'undo' to restore it.[/yellow]")

    def add(self, data: Dict[str, Any]) -> Dict[str, Any]:
        errors = validate_form(data)
        if errors:
            raise ValueError(", ".join(errors))
        product = self.client.add_product(data)
        self.client.load_products()
        return product

    def update(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        current = next((p for p in self.client.cache.value if p["id"] == product_id), {})
        errors = validate_form({**current, **changes})
        if errors:
            raise ValueError(", ".join(errors))
        return self.client.update_product(product_id, changes)

    def confirm_delete(self, product: Dict[str, Any]) -> None:
        self.product_to_delete = product

    def cancel_delete(self) -> None:
        self.product_to_delete = None

    def delete(self) -> Optional[str]:
        if not self.product_to_delete:
            return None
        product_id = self.product_to_delete["id"]
        message = self.client.delete_product(product_id)
        self.undo_id = product_id
        self.product_to_delete = None
        return message

    def undo_delete(self) -> Optional[str]:
        if not self.undo_id:
            return None
        message = self.client.restore_product(self.undo_id)
        self.undo_id = ""
        return message

    def _pick(self) -> Optional[Dict[str, Any]]:
        if not self.visible:
            self.console.print("[yellow]No products to choose from[/yellow]")
            return None
        index = IntPrompt.ask("Row #", console=self.console)
        if index < 1 or index > len(self.visible):
            self.console.print("[red]No such row[/red]")
            return None
        return self.visible[index - 1]

    def _prompt_product(self, current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        current = current or {}
        return {
            "name": Prompt.ask("Name", default=current.get("name"), console=self.console),
            "quantity": IntPrompt.ask(
                "Quantity", default=current.get("quantity", 1), console=self.console
            ),
            "serial_number": Prompt.ask(
                "Serial number", default=current.get("serial_number"), console=self.console
            ),
        }

    def handle(self, command: str) -> bool:
        """Run one shell command; returns False when the shell should exit."""
        if command in ("quit", "exit", "q"):
            return False
        if command == "list":
            self.refresh()
            self.show()
        elif command == "search":
            self.search(Prompt.ask("Search", default="", console=self.console))
            self.show()
        elif command == "add":
            self.add(self._prompt_product())
            self.console.print("[green]Product added[/green]")
            self.show()
        elif command == "update":
            product = self._pick()
            if product:
                self.update(product["id"], self._prompt_product(product))
                self.console.print("[green]Product updated[/green]")
                self.show()
        elif command == "delete":
            product = self._pick()
            if product:
                self.confirm_delete(product)
                if Confirm.ask(f"Delete '{product['name']}'?", console=self.console):
                    self.console.print(f"[green]{self.delete()}[/green]")
                else:
                    self.cancel_delete()
                self.show()
        elif command == "undo":
            message = self.undo_delete()
            self.console.print(f"[green]{message}[/green]" if message else "[yellow]Nothing to undo[/yellow]")
            self.show()
        else:
            self.console.print(HELP)
        return True

    def run(self) -> None:
        self.refresh()
        self.show()
        self.console.print(HELP)
        while True:
            command = Prompt.ask("inventory", console=self.console).strip().lower()
            try:
                if not self.handle(command):
                    break
            except (ProductClientError, ValueError) as e:
                self.console.print(f"[red]❌ {e}[/red]")
        self.close()
