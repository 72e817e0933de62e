# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Built-in LedgerShell commands.

Each command is a small object with ``names``, ``help_text`` and
``execute()``. Output goes to ``app.out``; failures are raised as
CmdError subclasses tagged with the command's primary name.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .errors import (
    CmdArgumentError,
    CmdDependencyError,
    CmdSyntaxError,
    LedgerShellError,
    SyntaxErrorKind,
)
from .interfaces import CmdResult, Command
from .ledger import Ledger, Money, Transaction
from .utils import format_table

if TYPE_CHECKING:
    from .kernel import Application  # pragma: no cover


class BaseCommand:
    """Shared plumbing for the built-in commands."""

    names: list[str] = []
    help_text: str = ""

    @property
    def primary_name(self) -> str:
        return self.names[0]

    # ---------- error helpers ----------

    def missing_subcommand(self) -> CmdSyntaxError:
        return CmdSyntaxError(
            SyntaxErrorKind.MISSING_SUBCOMMAND, command=self.primary_name
        )

    def invalid_subcommand(self, option: str) -> CmdSyntaxError:
        return CmdSyntaxError(
            SyntaxErrorKind.INVALID_SUBCOMMAND,
            option,
            command=self.primary_name,
        )

    def missing_param(self, detail: str) -> CmdSyntaxError:
        return CmdSyntaxError(
            SyntaxErrorKind.MISSING_PARAM, detail, command=self.primary_name
        )

    def argument_error(self, message: str) -> CmdArgumentError:
        return CmdArgumentError(message, command=self.primary_name)

    def dependency_error(self, cause: BaseException) -> CmdDependencyError:
        return CmdDependencyError(cause, command=self.primary_name)


# -----------------------
# account
# -----------------------


class AccountCommand(BaseCommand):
    names = ["account", "acc", "ac"]
    help_text = (
        "Usage: account [OPTION] ACCOUNT_NAME\n"
        "Perform operations on user accounts.\n"
        "\n"
        "Options:\n"
        "  --new    Create a new account with ACCOUNT_NAME\n"
        "  --list   List the existing accounts"
    )

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        if not args:
            raise self.missing_subcommand()

        option = args[0]
        if option == "--new":
            return self._add_new_account(args[1:], ledger, app)
        if option == "--list":
            return self._list_accounts(ledger, app)
        raise self.invalid_subcommand(option)

    def _add_new_account(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        if not args:
            raise self.missing_param("Adding a new account requires a name")

        name = args[0]
        try:
            ledger.add_new_account(name)
        except ValueError as e:
            raise self.argument_error(str(e)) from e

        print(f"Created account '{name}'", file=app.out)
        return CmdResult.OK

    def _list_accounts(self, ledger: Ledger, app: Application) -> CmdResult:
        rows = [[a.name, a.total()] for a in ledger.accounts]
        if not rows:
            print("  (none)", file=app.out)
            return CmdResult.OK

        table = format_table(["Account", "Total"], rows)
        for line in table.splitlines():
            print(f"  {line}", file=app.out)
        return CmdResult.OK


# -----------------------
# category
# -----------------------


class CategoryCommand(BaseCommand):
    names = ["category", "cat"]
    help_text = (
        "Usage: category [OPTION] CATEGORY_NAME\n"
        "Add new transaction categories or list existing ones.\n"
        "\n"
        "Options:\n"
        "  --new   Create a new category with CATEGORY_NAME\n"
        "  --list  List existing transaction categories"
    )

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        if not args:
            raise self.missing_subcommand()

        option = args[0]
        if option == "--new":
            if len(args) < 2:
                raise self.missing_param(
                    "Must provide transaction category name"
                )
            category_id = args[1].strip().lower()
            try:
                ledger.categories.create_category(category_id)
            except ValueError as e:
                raise self.argument_error(str(e)) from e
            return CmdResult.OK

        if option == "--list":
            for category_id in ledger.categories:
                print(f"  {category_id}", file=app.out)
            return CmdResult.OK

        raise self.invalid_subcommand(option)


# -----------------------
# exit
# -----------------------


class ExitCommand(BaseCommand):
    names = ["exit", "ex", "quit"]
    help_text = "Usage: exit\nLeaves the shell. Unsaved changes are lost."

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        print(app.exit_message, file=app.out)
        return CmdResult.TERMINATE


# -----------------------
# load / store
# -----------------------


class LoadCommand(BaseCommand):
    """Replace the in-memory ledger with the saved one."""

    names = ["load"]
    help_text = "Usage: load\nLoads saved data from disk."

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        print("Loading user data...", file=app.out)
        try:
            new_ledger = app.load_ledger()
        except LedgerShellError as e:
            raise self.dependency_error(e) from e

        ledger.replace_with(new_ledger)
        print("Loaded!", file=app.out)
        return CmdResult.OK


class StoreCommand(BaseCommand):
    names = ["store", "save"]
    help_text = "Usage: store\nSaves data to disk."

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        print("Saving user data...", file=app.out)
        try:
            app.store_ledger(ledger)
        except LedgerShellError as e:
            print("Failed to save data!", file=app.out)
            raise self.dependency_error(e) from e

        print("Saved!", file=app.out)
        return CmdResult.OK


# -----------------------
# transaction
# -----------------------


class TransactionCommand(BaseCommand):
    names = ["transaction", "tr"]
    help_text = (
        "Usage: transaction ACCOUNT AMOUNT DESCRIPTION [CATEGORY]\n"
        "Creates a new transaction entry in ACCOUNT."
    )

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        if len(args) < 3:
            raise self.missing_param(
                "Invalid format. Usage: "
                "`transaction ACCOUNT AMOUNT DESCRIPTION [CATEGORY]`"
            )

        account_name, raw_amount, description = args[0], args[1], args[2]

        try:
            amount = Money.from_float(float(raw_amount))
        except (ValueError, ArithmeticError) as e:
            # ArithmeticError: nan / inf cannot be rounded to cents
            raise self.dependency_error(e) from e

        category: str | None = None
        if len(args) > 3:
            category = args[3]
            if ledger.categories.get_category(category) is None:
                raise self.argument_error(f"No category named '{category}'")

        account = ledger.get_account_by_name(account_name)
        if account is None:
            raise self.argument_error(
                f"Could not find account named '{account_name}'"
            )

        account.add_transaction(
            Transaction(
                amount=amount,
                time=datetime.now(timezone.utc),
                description=description,
                category=category,
            )
        )
        return CmdResult.OK


def command_list() -> list[Command]:
    """The built-in commands in registration (and help listing) order."""
    return [
        AccountCommand(),
        CategoryCommand(),
        ExitCommand(),
        LoadCommand(),
        StoreCommand(),
        TransactionCommand(),
    ]
