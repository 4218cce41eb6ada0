import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Dict, Optional, Union


LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Largest accepted coin amount (2**53 - 1)
MAX_AMOUNT = 9_007_199_254_740_991

Amount = Union[int, float, Decimal]


# ==================== Enums ====================

class MachineState(Enum):
    """Phases of a purchase session"""
    IDLE = "IDLE"
    COIN_INSERTED = "COIN_INSERTED"
    BUTTON_PRESSED = "BUTTON_PRESSED"
    DISPENSING = "DISPENSING"


# ==================== Core Models ====================

@dataclass(frozen=True, eq=False)
class Product:
    """A catalog entry: identity and price"""
    product_id: str
    name: str
    price: int

    def __post_init__(self):
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError(f"Price must be an integer, got {self.price!r}")
        if self.price < 0:
            raise ValueError(f"Price cannot be negative: {self.price}")

    def __repr__(self) -> str:
        return f"Product({self.product_id}, {self.name}, ${self.price})"

    def __hash__(self) -> int:
        return hash(self.product_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Product):
            return False
        return self.product_id == other.product_id


@dataclass
class InventoryEntry:
    product: Product
    quantity: int


class Inventory:
    """Tracks stock per product id"""

    def __init__(self):
        self._stock: Dict[str, InventoryEntry] = {}

    def add_product(self, product: Product, quantity: int = 1) -> bool:
        """Add stock for a product, merging with an existing entry"""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            LOGGER.warning("[Inventory] Invalid quantity %r for %s", quantity, product.name)
            return False

        entry = self._stock.get(product.product_id)
        if entry:
            entry.quantity += quantity
        else:
            self._stock[product.product_id] = InventoryEntry(product, quantity)

        LOGGER.info("[Inventory] Added %d x %s", quantity, product.name)
        return True

    def is_available(self, product_id: str) -> bool:
        entry = self._stock.get(product_id)
        return entry is not None and entry.quantity > 0

    def remove_product(self, product_id: str) -> Optional[Product]:
        """Take one unit out of stock; None when the product is not available"""
        if not self.is_available(product_id):
            return None

        entry = self._stock[product_id]
        entry.quantity -= 1
        return entry.product

    def get_quantity(self, product_id: str) -> int:
        entry = self._stock.get(product_id)
        return entry.quantity if entry else 0

    def get_product(self, product_id: str) -> Optional[Product]:
        entry = self._stock.get(product_id)
        return entry.product if entry else None

    def __repr__(self) -> str:
        items = ", ".join(f"{pid}: {e.quantity}" for pid, e in self._stock.items())
        return f"Inventory({items})"


class PaymentProcessor:
    """Validates tendered amounts"""

    @staticmethod
    def validate_amount(amount: Amount) -> bool:
        """Accept only finite whole numbers in (0, MAX_AMOUNT]"""
        if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
            return False
        if isinstance(amount, Decimal):
            if not amount.is_finite():
                return False
        elif isinstance(amount, float) and not math.isfinite(amount):
            return False
        # Bound before the wholeness check so huge Decimals are never expanded
        if not 0 < amount <= MAX_AMOUNT:
            return False
        return amount % 1 == 0


# ==================== State Pattern: Machine States ====================

class MachineStateHandler(ABC):
    """Behavior of the machine in one phase of a purchase"""

    state: MachineState

    @abstractmethod
    def insert_coin(self, machine: 'VendingMachine', amount: Amount) -> bool:
        pass

    @abstractmethod
    def select_product(self, machine: 'VendingMachine', product_id: str) -> bool:
        pass

    @abstractmethod
    def press_button(self, machine: 'VendingMachine') -> bool:
        pass

    @abstractmethod
    def dispense_item(self, machine: 'VendingMachine') -> Optional[Product]:
        pass


class IdleState(MachineStateHandler):
    """Waiting for a coin"""

    state = MachineState.IDLE

    def insert_coin(self, machine: 'VendingMachine', amount: Amount) -> bool:
        if not PaymentProcessor.validate_amount(amount):
            LOGGER.warning("[Machine] Invalid coin amount: %r", amount)
            return False

        machine.set_inserted_money(int(amount))
        machine.set_state(CoinInsertedState())
        LOGGER.info("[Machine] Inserted $%d", int(amount))
        return True

    def select_product(self, machine: 'VendingMachine', product_id: str) -> bool:
        LOGGER.warning("[Machine] Insert a coin first")
        return False

    def press_button(self, machine: 'VendingMachine') -> bool:
        LOGGER.warning("[Machine] Insert a coin and select a product first")
        return False

    def dispense_item(self, machine: 'VendingMachine') -> Optional[Product]:
        LOGGER.warning("[Machine] Insert a coin and select a product first")
        return None


class CoinInsertedState(MachineStateHandler):
    """Coin accepted, waiting for a product selection"""

    state = MachineState.COIN_INSERTED

    def insert_coin(self, machine: 'VendingMachine', amount: Amount) -> bool:
        LOGGER.warning("[Machine] Coin already inserted. Select a product")
        return False

    def select_product(self, machine: 'VendingMachine', product_id: str) -> bool:
        if not machine.get_inventory().is_available(product_id):
            LOGGER.warning("[Machine] Product %s not available", product_id)
            return False

        machine.set_selected_product_id(product_id)
        machine.set_state(ButtonPressedState())
        LOGGER.info("[Machine] Product %s selected", product_id)
        return True

    def press_button(self, machine: 'VendingMachine') -> bool:
        LOGGER.warning("[Machine] Select a product first")
        return False

    def dispense_item(self, machine: 'VendingMachine') -> Optional[Product]:
        LOGGER.warning("[Machine] Select a product and press the button")
        return None


class ButtonPressedState(MachineStateHandler):
    """Product selected, waiting for confirmation"""

    state = MachineState.BUTTON_PRESSED

    def insert_coin(self, machine: 'VendingMachine', amount: Amount) -> bool:
        LOGGER.warning("[Machine] Payment already made. Press the button to dispense")
        return False

    def select_product(self, machine: 'VendingMachine', product_id: str) -> bool:
        LOGGER.warning("[Machine] Product already selected. Press the button")
        return False

    def press_button(self, machine: 'VendingMachine') -> bool:
        machine.set_state(DispensingState())
        LOGGER.info("[Machine] Button pressed. Dispensing product...")
        return True

    def dispense_item(self, machine: 'VendingMachine') -> Optional[Product]:
        LOGGER.warning("[Machine] Press the button to confirm")
        return None


class DispensingState(MachineStateHandler):
    """Releasing the selected product"""

    state = MachineState.DISPENSING

    def insert_coin(self, machine: 'VendingMachine', amount: Amount) -> bool:
        LOGGER.warning("[Machine] Dispensing in progress. Please wait")
        return False

    def select_product(self, machine: 'VendingMachine', product_id: str) -> bool:
        LOGGER.warning("[Machine] Cannot select a product while dispensing")
        return False

    def press_button(self, machine: 'VendingMachine') -> bool:
        LOGGER.warning("[Machine] Product is being dispensed")
        return False

    def dispense_item(self, machine: 'VendingMachine') -> Optional[Product]:
        product_id = machine.get_selected_product_id()
        product = machine.get_inventory().remove_product(product_id)

        if product:
            LOGGER.info("[Machine] Dispensed: %s", product.name)
        else:
            # Stock vanished after selection; never leave the session stuck
            LOGGER.warning("[Machine] Error dispensing product %s", product_id)

        machine.reset_session()
        machine.set_state(IdleState())
        return product


# ==================== Main Vending Machine Class ====================

class VendingMachine:
    """Delegates every operation to the active state handler"""

    def __init__(self, inventory: Optional[Inventory] = None):
        self._state_handler: MachineStateHandler = IdleState()
        self._inventory = inventory if inventory is not None else Inventory()

        # Session state
        self._inserted_money = 0
        self._selected_product_id: Optional[str] = None

    def get_state(self) -> MachineState:
        return self._state_handler.state

    def get_state_handler(self) -> MachineStateHandler:
        return self._state_handler

    def set_state(self, state: MachineStateHandler) -> None:
        self._state_handler = state

    def get_inventory(self) -> Inventory:
        return self._inventory

    def get_inserted_money(self) -> int:
        return self._inserted_money

    def set_inserted_money(self, amount: int) -> None:
        self._inserted_money = amount

    def get_selected_product_id(self) -> Optional[str]:
        return self._selected_product_id

    def set_selected_product_id(self, product_id: Optional[str]) -> None:
        self._selected_product_id = product_id

    def reset_session(self) -> None:
        self._inserted_money = 0
        self._selected_product_id = None

    # Public API methods
    def insert_coin(self, amount: Amount) -> bool:
        return self._state_handler.insert_coin(self, amount)

    def select_product(self, product_id: str) -> bool:
        return self._state_handler.select_product(self, product_id)

    def press_button(self) -> bool:
        return self._state_handler.press_button(self)

    def dispense_item(self) -> Optional[Product]:
        return self._state_handler.dispense_item(self)

    # Maintenance methods
    def add_product(self, product: Product, quantity: int = 1) -> bool:
        """Stock the machine"""
        return self._inventory.add_product(product, quantity)

    def __repr__(self) -> str:
        return (f"VendingMachine({self.get_state().value}, "
                f"inserted=${self._inserted_money}, selected={self._selected_product_id})")


# ==================== Demo Usage ====================

DEMO_CATALOG = [
    (Product("1", "Coke", 25), 5),
    (Product("2", "Chips", 15), 3),
]


def main():
    """Demo the vending machine"""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    print("=== Vending Machine Demo ===\n")

    machine = VendingMachine()

    print("--- Stocking Machine ---")
    for product, quantity in DEMO_CATALOG:
        machine.add_product(product, quantity)

    print("\n--- Purchase: Coke ---")
    machine.insert_coin(25)
    machine.select_product("1")
    machine.press_button()
    product = machine.dispense_item()

    print(f"\nReceived: {product}")
    print(f"Machine: {machine}")
    print(f"Stock: {machine.get_inventory()}")
    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
