"""Ledger snapshot: native balance plus token accounts from every token program."""

from __future__ import annotations

import asyncio

from ..constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID
from ..domain import TokenAccount
from .context import PipelineContext


def token_programs(include_token_2022: bool) -> list[str]:
    programs = [TOKEN_PROGRAM_ID]
    if include_token_2022:
        programs.append(TOKEN_2022_PROGRAM_ID)
    return programs


async def read_ledger(ctx: PipelineContext) -> None:
    """Read the native balance and token accounts concurrently.

    Any ``LedgerUnavailable`` is fatal and propagates to the caller.

    Sets the native balance and token accounts in the context.
    """
    s = ctx.state.settings
    log = ctx.state.logger
    ledger = ctx.providers.ledger
    programs = token_programs(s.include_token_2022)

    log.info(
        "Reading ledger for %s (%d token program(s), %d endpoint(s))",
        ctx.address,
        len(programs),
        len(ledger.endpoints),
    )

    results = await asyncio.gather(
        ledger.get_native_balance(ctx.address),
        *[ledger.get_token_accounts(ctx.address, program) for program in programs],
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    lamports, *per_program = results
    accounts: list[TokenAccount] = []
    for program, program_accounts in zip(programs, per_program):
        log.debug("Program %s returned %d token accounts", program, len(program_accounts))
        accounts.extend(program_accounts)

    ctx.native_lamports = lamports
    ctx.token_accounts = accounts
