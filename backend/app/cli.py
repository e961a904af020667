"""Terminal front end for the products API."""

from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from app.client.product_client import ProductClient, ProductClientError
from app.client.shell import InventoryShell, render_table, validate_form
from app.config import settings

console = Console()

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Manage inventory products")

API_URL_OPTION = typer.Option(None, "--api-url", help="Backend base URL (defaults to API_URL)")


def get_client(api_url: Optional[str]) -> ProductClient:
    return ProductClient(api_url or settings.API_URL)


def _fail(e: Exception) -> None:
    console.print(f"[red]❌ {e}[/red]")
    raise typer.Exit(code=1) from e


@app.command("list")
def list_products(
    search: str = typer.Option("", "--search", "-s", help="Only show products whose name contains this"),
    include_deleted: bool = typer.Option(False, "--all", "-a", help="Include soft-deleted products"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """List products as a table."""
    client = get_client(api_url)
    try:
        client.load_products(include_deleted=include_deleted)
    except ProductClientError as e:
        _fail(e)

    products = client.filter_products(search)
    if not products:
        console.print("[yellow]No products found[/yellow]")
        return
    console.print(render_table(products))
    console.print(f"\n[green]Found {len(products)} products[/green]")


@app.command("add")
def add_product(
    name: str = typer.Argument(..., help="Product name"),
    quantity: int = typer.Option(1, "--quantity", "-q", help="Quantity in stock"),
    serial_number: str = typer.Option(..., "--serial", "-s", help="Serial number"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Add a new product."""
    data = {"name": name, "quantity": quantity, "serial_number": serial_number}
    errors = validate_form(data)
    if errors:
        _fail(ValueError(", ".join(errors)))
    try:
        product = get_client(api_url).add_product(data)
    except ProductClientError as e:
        _fail(e)
    console.print(f"[green]✅ Added '{product['name']}' ({product['id']})[/green]")


@app.command("update")
def update_product(
    product_id: str = typer.Argument(..., help="Product id"),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    quantity: Optional[int] = typer.Option(None, "--quantity", "-q"),
    serial_number: Optional[str] = typer.Option(None, "--serial", "-s"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Update fields of an existing product."""
    changes = {
        k: v
        for k, v in (("name", name), ("quantity", quantity), ("serial_number", serial_number))
        if v is not None
    }
    if not changes:
        console.print("[yellow]Nothing to update[/yellow]")
        return
    errors = validate_form(changes, partial=True)
    if errors:
        _fail(ValueError(", ".join(errors)))
    try:
        product = get_client(api_url).update_product(product_id, changes)
    except ProductClientError as e:
        _fail(e)
    console.print(f"[green]✅ Updated '{product['name']}'[/green]")


@app.command("delete")
def delete_product(
    product_id: str = typer.Argument(..., help="Product id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Soft-delete a product."""
    if not yes and not Confirm.ask(f"Delete product {product_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    try:
        message = get_client(api_url).delete_product(product_id)
    except ProductClientError as e:
        _fail(e)
    console.print(f"[green]✅ {message}[/green]")


@app.command("restore")
def restore_product(
    product_id: str = typer.Argument(..., help="Product id"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Restore a soft-deleted product."""
    try:
        message = get_client(api_url).restore_product(product_id)
    except ProductClientError as e:
        _fail(e)
    console.print(f"[green]✅ {message}[/green]")


@app.command("shell")
def shell(api_url: Optional[str] = API_URL_OPTION) -> None:
    """Interactive product table with search, add, update, delete and undo."""
    try:
        InventoryShell(get_client(api_url), console=console).run()
    except ProductClientError as e:
        _fail(e)


@app.command("serve")
def serve(
    host: str = typer.Option(settings.APP_HOST, "--host"),
    port: int = typer.Option(settings.APP_PORT, "--port"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    """Run the backend API."""
    import uvicorn

    uvicorn.run("app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
