"""Startup, shutdown and exit status of the console entrypoint."""

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.main import build_parser, main
from mechanic_shop.app.services.customer_service import CustomerService

from helpers import scripted_console


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.database is None
    assert args.log_level


def test_unreachable_database_exits_with_status_1(tmp_path, capsys):
    missing = tmp_path / "no" / "such" / "dir" / "shop.db"

    status = main([str(missing)], console=scripted_console("11"))

    assert status == 1
    assert "Unable to connect to database" in capsys.readouterr().err


def test_session_creates_schema_and_persists(tmp_path):
    db_file = tmp_path / "shop.db"
    console = scripted_console("1", "5", "Ann", "Lee", "555", "addr", "11")

    assert main([str(db_file)], console=console) == 0

    output = console.stdout.getvalue()
    assert output.startswith(f"Connecting to database {db_file}...\nDone\n")
    assert output.endswith("Disconnecting from database...\nDone\n\nBye !\n")
    with DataStore(str(db_file)) as store:
        assert CustomerService.get_customer(store, 5).fname == "Ann"


def test_end_of_input_exits_cleanly(tmp_path):
    assert main([str(tmp_path / "shop.db")], console=scripted_console()) == 0
