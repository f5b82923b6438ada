"""
Inventory ledger: folds purchases and sales into stock levels.

For every product key the fold keeps a running quantity and a weighted
average purchase cost:

    PURCHASE  quantity += q; average_cost = (old value + q * price) / quantity
              (only while the resulting quantity is positive)
    SALE      quantity -= q; selling_price = price

The same single-transaction step serves both the incremental update done on
submit and the from-scratch derivation over the whole history, so the two
always agree for a history already in date order.

Pure module -- no I/O, no logging, never raises on numeric content.
"""

from collections.abc import Iterable, Mapping
from functools import reduce

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.transaction import Transaction, TransactionType


def normalize_product_key(description: str) -> str:
    """Map a free-text item description to its inventory key: strip, lowercase."""
    return description.strip().lower()


def touched_keys(transaction: Transaction) -> list[str]:
    """Distinct product keys referenced by a transaction, in first-seen order."""
    keys: dict[str, None] = {}
    for line in transaction.items:
        keys.setdefault(normalize_product_key(line.description), None)
    return list(keys)


def apply_transaction(
    state: Mapping[str, InventoryItem],
    transaction: Transaction,
) -> dict[str, InventoryItem]:
    """
    Apply one transaction's line items, in list order, to an inventory snapshot.

    Args:
        state: Current inventory keyed by product key. Not modified.
        transaction: Purchase or sale to fold in.

    Returns:
        New snapshot. Items the transaction does not touch are shared with
        the input; touched items are fresh copies.
    """
    result = dict(state)
    copied: set[str] = set()

    for line in transaction.items:
        key = normalize_product_key(line.description)

        item = result.get(key)
        if item is None:
            item = InventoryItem(
                id=key,
                name=line.description,
                last_updated=transaction.date,
            )
            copied.add(key)
        elif key not in copied:
            item = item.model_copy()
            copied.add(key)

        if transaction.type == TransactionType.PURCHASE:
            current_value = item.quantity * item.average_cost
            incoming_value = line.quantity * line.price
            item.quantity += line.quantity
            # Keep the last meaningful cost basis when stock is still <= 0
            if item.quantity > 0:
                item.average_cost = (current_value + incoming_value) / item.quantity
        elif transaction.type == TransactionType.SALE:
            item.quantity -= line.quantity
            item.selling_price = line.price

        item.last_updated = transaction.date
        result[key] = item

    return result


def sort_for_ledger(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Order transactions by business date; same-date ties keep input order."""
    return sorted(transactions, key=lambda t: t.date)


def derive_inventory(transactions: Iterable[Transaction]) -> dict[str, InventoryItem]:
    """Fold the full transaction history, in date order, from an empty inventory."""
    return reduce(apply_transaction, sort_for_ledger(transactions), {})
