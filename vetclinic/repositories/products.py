"""Stock queries over the product repository."""
import logging

logger = logging.getLogger(__name__)


def get_products_in_stock(repo):
    product = repo.model
    with repo.storage_guard('get_products_in_stock'):
        products = product.query.filter(product.cantidad > 0).order_by(product.nombre).all()
    return [p.to_dict() for p in products]


def get_low_stock_products(repo, threshold=10):
    product = repo.model
    with repo.storage_guard('get_low_stock_products'):
        rows = (product.query
                .with_entities(product.nombre, product.cantidad)
                .filter(product.cantidad < threshold)
                .order_by(product.cantidad.asc())
                .all())
    return [{'nombre': nombre, 'cantidad': cantidad} for nombre, cantidad in rows]


def decrement_stock(repo, product_id, quantity):
    """Take ``quantity`` units out of stock in a single conditional UPDATE.

    Returns False without writing when the stock would go negative. Does not
    commit; the caller owns the transaction.
    """
    product = repo.model
    with repo.storage_guard('decrement_stock'):
        affected = (product.query
                    .filter(product.id == product_id, product.cantidad >= quantity)
                    .update({product.cantidad: product.cantidad - quantity},
                            synchronize_session=False))
    if not affected:
        logger.warning(f"Stock insuficiente para producto {product_id}: se omitió descontar {quantity}")
    return bool(affected)
