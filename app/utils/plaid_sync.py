# app/utils/plaid_sync.py
"""
Pull data from a linked institution into the store.

Accounts are matched on plaid_account_id under the owning user and
transactions on plaid_transaction_id, so running a sync twice updates rows
instead of duplicating them.
"""
import logging
import uuid
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.plaid import AccountInfo, PlaidClient, TransactionInfo
from app.crud.account import get_account_by_plaid_id
from app.crud.plaid_item import get_plaid_item_by_plaid_id
from app.crud.transaction import get_pending_plaid_transactions, get_transaction_by_plaid_id
from app.models.account import Account
from app.models.plaid_item import PlaidItem
from app.models.transaction import Transaction
from app.models.user import utcnow

logger = logging.getLogger(__name__)


async def link_item(
    user_id: uuid.UUID,
    public_token: str,
    client: PlaidClient,
    db: AsyncSession,
) -> Tuple[PlaidItem, List[Account]]:
    """Exchange a Link public token, store the item and import its accounts."""
    exchange = await client.exchange_public_token(public_token)
    access_token = exchange["access_token"]

    info = await client.get_item(access_token)
    remote_accounts = await client.get_accounts(access_token)

    item = await get_plaid_item_by_plaid_id(exchange["item_id"], db)
    if item is not None and item.user_id == user_id:
        # Re-linking an institution through Link update mode issues a new access token
        item.plaid_access_token = access_token
        item.status = "active"
    else:
        item = PlaidItem(
            user_id=user_id,
            plaid_access_token=access_token,
            plaid_item_id=exchange["item_id"],
            status="active",
        )
        db.add(item)
    item.institution_id = info.institution_id
    item.institution_name = info.institution_name
    accounts = await _upsert_accounts(user_id, item.plaid_item_id, remote_accounts, db)

    # Item and accounts land together or not at all
    await db.commit()
    await db.refresh(item)
    for account in accounts:
        await db.refresh(account)

    logger.info(f"Linked {info.institution_name} for user {user_id} with {len(accounts)} accounts")
    return item, accounts


async def _upsert_accounts(
    user_id: uuid.UUID,
    plaid_item_id: str,
    remote_accounts: List[AccountInfo],
    db: AsyncSession,
) -> List[Account]:
    now = utcnow()
    accounts: List[Account] = []
    for remote in remote_accounts:
        account = await get_account_by_plaid_id(remote.account_id, user_id, db)
        if account is None:
            account = Account(
                user_id=user_id,
                plaid_account_id=remote.account_id,
                plaid_item_id=plaid_item_id,
                account_name=remote.name,
                account_type=remote.account_type,
                currency=remote.currency,
            )
            db.add(account)
        account.balance = remote.balance
        account.last_synced = now
        accounts.append(account)
    await db.flush()
    return accounts


async def sync_item_transactions(
    item: PlaidItem,
    client: PlaidClient,
    db: AsyncSession,
    days: int = 30,
    today: Optional[date] = None,
) -> Dict[str, int]:
    """
    Refresh balances and upsert the trailing ``days`` of transactions for an item.

    A posted transaction that names a stored pending one through
    ``pending_transaction_id`` takes over that row, keeping its category.
    Pending rows inside the window that Plaid no longer returns are removed.
    """
    end_date = today or date.today()
    start_date = end_date - timedelta(days=days)

    remote_accounts = await client.get_accounts(item.plaid_access_token)
    remote_transactions = await client.get_transactions(item.plaid_access_token, days=days, today=end_date)

    accounts = await _upsert_accounts(item.user_id, item.plaid_item_id, remote_accounts, db)
    by_plaid_id = {a.plaid_account_id: a for a in accounts}

    created = updated = skipped = removed = 0
    seen = set()
    for remote in remote_transactions:
        seen.add(remote.transaction_id)
        account = by_plaid_id.get(remote.account_id)
        if account is None:
            skipped += 1
            continue

        values = _transaction_values(remote)
        tx = await get_transaction_by_plaid_id(remote.transaction_id, db)
        if remote.pending_transaction_id:
            pending_tx = await get_transaction_by_plaid_id(remote.pending_transaction_id, db)
            if pending_tx is not None and pending_tx.account_id == account.id:
                if tx is None:
                    pending_tx.plaid_transaction_id = remote.transaction_id
                    tx = pending_tx
                else:
                    await db.delete(pending_tx)
                    removed += 1
        if tx is None:
            db.add(Transaction(
                account_id=account.id,
                plaid_transaction_id=remote.transaction_id,
                **values,
            ))
            created += 1
        elif tx.account_id != account.id:
            # Same Plaid id already stored under a different account
            skipped += 1
        else:
            for field, value in values.items():
                setattr(tx, field, value)
            tx.updated_at = utcnow()
            updated += 1

    await db.flush()
    stale = [
        tx for tx in await get_pending_plaid_transactions(
            [a.id for a in accounts], start_date, end_date, db
        )
        if tx.plaid_transaction_id not in seen
    ]
    for tx in stale:
        await db.delete(tx)
    removed += len(stale)

    await db.commit()

    result = {
        "accounts_updated": len(accounts),
        "transactions_created": created,
        "transactions_updated": updated,
        "transactions_skipped": skipped,
        "transactions_removed": removed,
    }
    logger.info(f"Synced item {item.plaid_item_id}: {result}")
    return result


def _transaction_values(remote: TransactionInfo) -> Dict:
    return {
        "date": remote.date,
        # Plaid reports outflows as positive amounts; the store uses negative
        "amount": -remote.amount,
        "description": remote.name[:255],
        "merchant_name": remote.merchant_name,
        "pending": remote.pending,
    }
