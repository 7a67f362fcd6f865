"""
Logique panier pure (pas d'API de paiement, pas de DB): instantané des lignes et totaux.
"""
from typing import Any, Dict, List

from storefront.config import TAX_RATE
from storefront.orders.models import OrderLineIn
from storefront.utils.errors import ValidationError

# module storefront.orders.pricing
def requested_item_numbers(lines: List[OrderLineIn]) -> List[int]:
    """
    Numéros d'articles distincts demandés, dans l'ordre du panier.
    - Soulève ValidationError si un numéro n'est pas un entier positif.
    """
    numbers: List[int] = []
    for line in lines:
        try:
            number = int(str(line.itemNumber).strip())
        except ValueError:
            raise ValidationError(f"Article introuvable: {line.itemNumber}")
        if number <= 0:
            raise ValidationError(f"Article introuvable: {line.itemNumber}")
        if number not in numbers:
            numbers.append(number)
    return numbers


def build_order_lines(lines: List[OrderLineIn], items_by_number: Dict[int, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Construit l'instantané des lignes de commande.
    - Copie nom, prix, pays, type de maillot et saison de l'article courant.
    - Le prix est figé: un changement ultérieur du catalogue n'affecte pas la commande.
    - Soulève ValidationError si un article référencé n'existe pas.
    """
    snapshot: List[Dict[str, Any]] = []
    for line in lines:
        number = int(str(line.itemNumber).strip())
        item = items_by_number.get(number)
        if not item:
            raise ValidationError(f"Article introuvable: {line.itemNumber}")
        snapshot.append({
            "itemNumber": str(number),
            "name": item.get("name"),
            "price": float(item.get("price") or 0),
            "country": item.get("country"),
            "kitType": item.get("kit_type"),
            "season": item.get("season"),
            "quantity": int(line.quantity),
        })
    return snapshot


def compute_totals(lines: List[Dict[str, Any]]) -> Dict[str, float]:
    """subtotal = Σ(prix × quantité); tax = subtotal × 7 %; total = subtotal + tax (arrondis au centime)."""
    subtotal = sum(float(l["price"]) * int(l["quantity"]) for l in lines)
    tax = subtotal * TAX_RATE
    return {
        "subtotal": round(subtotal, 2),
        "tax": round(tax, 2),
        "total": round(subtotal + tax, 2),
    }
