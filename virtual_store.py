"""
Virtual Store
=============

Core Design: Toy storefront with a product catalog and a shopping cart whose
views refresh themselves whenever the cart changes.

Design Patterns & Strategies Used:
1. Encapsulation, Inheritance, Polymorphism - Product hierarchy
2. Factory Method - Create products from a type tag
3. Observer Pattern - Cart notifies its views on every change
4. Strategy Pattern - Interchangeable discount calculation

Features:
- Create phones and clothing from presets
- Add/remove catalog products to/from the cart
- Switch between no discount and a percentage discount
- Text panels for catalog, cart, total and activity log
- Interactive command shell
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Tuple, Callable, Dict
from dataclasses import dataclass
import argparse
import sys

from store_logger import (
    ConsoleAppender,
    FileAppender,
    LogAppender,
    Logger,
    LoggerFactory,
    LogLevel,
    PanelAppender,
    SimpleFormatter,
)


DEFAULT_LOGGER_NAME = "virtual_store"
STOREFRONT_LOGGER_NAME = "storefront"


def get_default_logger() -> Logger:
    """Shared pattern logger; silent unless someone adds appenders to it"""
    return LoggerFactory.get_logger(DEFAULT_LOGGER_NAME)


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def coerce_rate(rate) -> float:
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        raise ValueError(f"Discount rate must be a number: {rate!r}") from None
    if not 0.0 <= rate <= 1.0:
        raise ValueError(f"Discount rate must be between 0 and 1: {rate}")
    return rate


@dataclass
class StoreConfig:
    """Store settings"""
    discount_rate: float = 0.10
    phone_preset: Tuple[str, float] = ("iPhone", 500.0)
    clothing_preset: Tuple[str, float] = ("Camisa", 30.0)
    log_level: LogLevel = LogLevel.INFO
    echo_logs: bool = True
    log_file: Optional[str] = None

    def __post_init__(self):
        self.discount_rate = coerce_rate(self.discount_rate)


# ==================== ENCAPSULATION, INHERITANCE, POLYMORPHISM ====================

class Product:
    """Base product. Name and price are private, exposed read-only."""

    def __init__(self, name: str, price: float):
        self.__name = name
        self.__price = float(price)

    @property
    def name(self) -> str:
        return self.__name

    @property
    def price(self) -> float:
        return self.__price

    def get_name(self) -> str:
        return self.__name

    def get_price(self) -> float:
        return self.__price

    def info(self) -> str:
        """Display line; subclasses override it"""
        return f"{self.__name} - {format_price(self.__price)}"

    def __repr__(self):
        return f"{type(self).__name__}({self.__name!r}, {self.__price:.2f})"


class Phone(Product):
    def info(self) -> str:
        return f"Celular: {self.name} - {format_price(self.price)}"


class Clothing(Product):
    def info(self) -> str:
        return f"Ropa: {self.name} - {format_price(self.price)}"


# ==================== FACTORY METHOD ====================

class ProductType(Enum):
    PHONE = "celular"
    CLOTHING = "ropa"


class ProductFactory:
    """Factory Method - Creates products from a type tag"""

    @staticmethod
    def create(product_type, config: Optional[StoreConfig] = None,
               logger: Optional[Logger] = None) -> Product:
        config = config or StoreConfig()
        logger = logger or get_default_logger()

        if isinstance(product_type, str):
            try:
                product_type = ProductType(product_type.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown product type: {product_type}") from None

        if product_type == ProductType.PHONE:
            logger.info("Factory: creating phone")
            name, price = config.phone_preset
            return Phone(name, price)
        elif product_type == ProductType.CLOTHING:
            logger.info("Factory: creating clothing")
            name, price = config.clothing_preset
            return Clothing(name, price)
        else:
            raise ValueError(f"Unknown product type: {product_type}")


# ==================== STRATEGY PATTERN ====================

class DiscountStrategy(ABC):
    """Returns the discount amount for a subtotal"""

    def __init__(self, logger: Optional[Logger] = None):
        self._logger = logger

    @property
    def logger(self) -> Logger:
        return self._logger or get_default_logger()

    @abstractmethod
    def calculate(self, subtotal: float) -> float:
        pass

    @abstractmethod
    def describe(self) -> str:
        pass


class NoDiscount(DiscountStrategy):
    def calculate(self, subtotal: float) -> float:
        self.logger.info("Strategy: applying no discount")
        return 0.0

    def describe(self) -> str:
        return "No discount"


class PercentageDiscount(DiscountStrategy):
    def __init__(self, rate: float = 0.10, logger: Optional[Logger] = None):
        super().__init__(logger)
        self.rate = coerce_rate(rate)

    def calculate(self, subtotal: float) -> float:
        self.logger.info(f"Strategy: applying {self.rate:.0%} discount")
        return subtotal * self.rate

    def describe(self) -> str:
        return f"{self.rate:.0%} off"


class DiscountType(Enum):
    NONE = "ninguno"
    PERCENTAGE = "descuento"


class DiscountStrategyFactory:
    """Maps a discount selection to a strategy"""

    @staticmethod
    def create(selection, config: Optional[StoreConfig] = None,
               logger: Optional[Logger] = None) -> DiscountStrategy:
        config = config or StoreConfig()
        if isinstance(selection, DiscountType):
            selection = selection.value
        if str(selection).strip().lower() == DiscountType.NONE.value:
            return NoDiscount(logger)
        return PercentageDiscount(config.discount_rate, logger)


# ==================== OBSERVER PATTERN ====================

class CartObserver(ABC):
    """Observer interface"""

    @abstractmethod
    def update(self, cart: 'Cart'):
        pass


class Observable:
    """Subject - keeps observers and notifies them in order"""

    def __init__(self):
        self._observers: List[CartObserver] = []

    @property
    def observers(self) -> List[CartObserver]:
        return list(self._observers)

    def attach(self, observer: CartObserver):
        """Attach an observer"""
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: CartObserver):
        """Detach an observer"""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self):
        """Notify all observers"""
        for observer in self._observers:
            observer.update(self)


class Cart(Observable):
    """Shopping cart. Every change notifies the observers."""

    def __init__(self, strategy: Optional[DiscountStrategy] = None):
        super().__init__()
        self.items: List[Product] = []
        self.strategy: DiscountStrategy = strategy or NoDiscount()

    def add(self, product: Product):
        self.items.append(product)
        self.notify()

    def remove(self, index: int) -> Product:
        if not 0 <= index < len(self.items):
            raise ValueError(f"No cart item at position {index}")
        product = self.items.pop(index)
        self.notify()
        return product

    def clear(self):
        self.items.clear()
        self.notify()

    def set_strategy(self, strategy: DiscountStrategy):
        self.strategy = strategy
        self.notify()

    def item_count(self) -> int:
        return len(self.items)

    def subtotal(self) -> float:
        return sum(item.price for item in self.items)

    def total(self) -> float:
        subtotal = self.subtotal()
        return subtotal - self.strategy.calculate(subtotal)


class CartViewObserver(CartObserver):
    """Concrete Observer - refreshes the storefront views"""

    def __init__(self, storefront: 'Storefront'):
        self.storefront = storefront

    def update(self, cart: Cart):
        self.storefront.render_cart()
        self.storefront.render_total()
        self.storefront.logger.info("Observer: views refreshed")


# ==================== STOREFRONT ====================

class Storefront:
    """Catalog, cart and the text panels shown to the user"""

    def __init__(self, config: Optional[StoreConfig] = None,
                 logger: Optional[Logger] = None):
        self.config = config or StoreConfig()
        if logger is None:
            logger = LoggerFactory.get_logger(STOREFRONT_LOGGER_NAME, self.config.log_level)
            logger.set_level(self.config.log_level)
        self.logger = logger

        self.log_appender = PanelAppender()
        self._appenders: List[LogAppender] = [self.log_appender]
        if self.config.echo_logs:
            self._appenders.append(ConsoleAppender())
        if self.config.log_file:
            self._appenders.append(FileAppender(self.config.log_file, SimpleFormatter()))
        for appender in self._appenders:
            self.logger.add_appender(appender)

        self.cart = Cart(NoDiscount(self.logger))
        self.catalog: List[Product] = []
        self.catalog_panel = ""
        self.cart_panel = ""
        self.total_label = f"Total: {format_price(0.0)}"
        self._view_observer = CartViewObserver(self)

    @property
    def log_panel(self) -> str:
        return self.log_appender.text()

    def init(self):
        self.cart.attach(self._view_observer)
        self.logger.info("System started")

    def create_product(self, product_type) -> Product:
        product = ProductFactory.create(product_type, self.config, self.logger)
        self.catalog.append(product)
        self.render_catalog()
        return product

    def render_catalog(self) -> str:
        self.catalog_panel = "\n".join(
            f"[{index}] {product.info()}" for index, product in enumerate(self.catalog)
        )
        return self.catalog_panel

    def add_to_cart(self, index: int) -> Product:
        if not 0 <= index < len(self.catalog):
            raise ValueError(f"No catalog product at position {index}")
        product = self.catalog[index]
        self.cart.add(product)
        self.logger.info(f"Added to cart: {product.name}")
        return product

    def remove_from_cart(self, index: int) -> Product:
        product = self.cart.remove(index)
        self.logger.info(f"Removed from cart: {product.name}")
        return product

    def clear_cart(self):
        self.cart.clear()
        self.logger.info("Cart cleared")

    def render_cart(self) -> str:
        self.cart_panel = "\n".join(item.info() for item in self.cart.items)
        return self.cart_panel

    def render_total(self) -> str:
        total = self.cart.total()
        self.total_label = f"Total: {format_price(total)}"
        self.logger.info(f"Total calculated: {format_price(total)}")
        return self.total_label

    def change_discount(self, selection) -> DiscountStrategy:
        strategy = DiscountStrategyFactory.create(selection, self.config, self.logger)
        self.cart.set_strategy(strategy)
        self.logger.info("Discount strategy changed")
        return strategy

    def render(self) -> str:
        sections = [
            ("Products", self.catalog_panel),
            (f"Cart ({self.cart.strategy.describe()})", self.cart_panel),
        ]
        lines = []
        for title, body in sections:
            lines.append(f"=== {title} ===")
            lines.append(body or "(empty)")
        lines.append(self.total_label)
        return "\n".join(lines)

    def close(self):
        """Detach and close this storefront's appenders; the logger is shared"""
        for appender in self._appenders:
            self.logger.remove_appender(appender)
            appender.close()
        self._appenders = []


# ==================== INTERACTIVE SHELL ====================

HELP_TEXT = """Commands:
  create <celular|ropa>         create a product in the catalog
  add <index>                   add a catalog product to the cart
  remove <index>                remove an item from the cart
  discount <ninguno|descuento>  change the discount strategy
  clear                         empty the cart
  show                          show catalog, cart and total
  log                           show the activity log
  help                          show this help
  exit                          quit"""


class StoreShell:
    """Line-oriented command loop standing in for the page buttons"""

    prompt = "store> "

    def __init__(self, storefront: Storefront,
                 input_fn: Optional[Callable[[str], str]] = None, output=None):
        self.storefront = storefront
        self.input_fn = input_fn
        self.output = output
        self.commands: Dict[str, Callable[[List[str]], None]] = {
            "create": self._create,
            "add": self._add,
            "remove": self._remove,
            "discount": self._discount,
            "clear": self._clear,
            "show": self._show,
            "log": self._log,
            "help": self._help,
        }

    def _print(self, text: str):
        print(text, file=self.output or sys.stdout)

    def _read(self) -> str:
        return (self.input_fn or input)(self.prompt)

    def run(self):
        while True:
            try:
                line = self._read().strip()
            except EOFError:
                break
            except KeyboardInterrupt:
                self._print("Interrupted. Type 'exit' to quit.")
                continue

            if not line:
                continue
            if line.lower() == "exit":
                break
            self.execute(line)

    def execute(self, line: str) -> bool:
        """Run one command line; returns False when nothing ran or it failed"""
        parts = line.split()
        if not parts:
            return False
        command, args = parts[0].lower(), parts[1:]
        handler = self.commands.get(command)
        if handler is None:
            self._print(f"Unknown command: {command}. Type 'help'.")
            return False
        try:
            handler(args)
        except ValueError as e:
            self._print(f"Error: {e}")
            return False
        return True

    @staticmethod
    def _single_arg(args: List[str], usage: str) -> str:
        if len(args) != 1:
            raise ValueError(f"usage: {usage}")
        return args[0]

    @staticmethod
    def _index_arg(args: List[str], usage: str) -> int:
        value = StoreShell._single_arg(args, usage)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Not a position: {value}") from None

    def _create(self, args: List[str]):
        product = self.storefront.create_product(self._single_arg(args, "create <celular|ropa>"))
        self._print(f"Created {product.info()}")

    def _add(self, args: List[str]):
        self.storefront.add_to_cart(self._index_arg(args, "add <index>"))
        self._print(self.storefront.total_label)

    def _remove(self, args: List[str]):
        self.storefront.remove_from_cart(self._index_arg(args, "remove <index>"))
        self._print(self.storefront.total_label)

    def _discount(self, args: List[str]):
        strategy = self.storefront.change_discount(
            self._single_arg(args, "discount <ninguno|descuento>"))
        self._print(f"Discount: {strategy.describe()}")

    def _clear(self, args: List[str]):
        self.storefront.clear_cart()
        self._print(self.storefront.total_label)

    def _show(self, args: List[str]):
        self._print(self.storefront.render())

    def _log(self, args: List[str]):
        self._print(self.storefront.log_panel or "(empty)")

    def _help(self, args: List[str]):
        self._print(HELP_TEXT)


# ==================== DEMONSTRATION ====================

def demo(storefront: Storefront):
    print("1. Factory Method - creating products:")
    storefront.create_product(ProductType.PHONE)
    storefront.create_product("ropa")
    print(storefront.catalog_panel)
    print()

    print("2. Observer Pattern - adding to the cart refreshes the views:")
    storefront.add_to_cart(0)
    storefront.add_to_cart(1)
    print(storefront.total_label)
    print()

    print("3. Strategy Pattern - switching to the discount:")
    storefront.change_discount(DiscountType.PERCENTAGE)
    print(storefront.total_label)
    print()

    print("4. Final screen:")
    print(storefront.render())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Virtual store pattern demo")
    parser.add_argument("--interactive", action="store_true",
                        help="Start the command shell instead of the demo")
    parser.add_argument("--discount-rate", type=float, default=0.10,
                        help="Rate used by the percentage discount")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not echo the activity log to the console")
    parser.add_argument("--log-file", help="Also append the activity log to this file")
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not 0.0 <= args.discount_rate <= 1.0:
        parser.error(f"--discount-rate must be between 0 and 1: {args.discount_rate}")
    config = StoreConfig(
        discount_rate=args.discount_rate,
        echo_logs=not args.quiet,
        log_file=args.log_file,
    )

    storefront = Storefront(config)
    storefront.init()
    try:
        if args.interactive:
            print(HELP_TEXT)
            StoreShell(storefront).run()
        else:
            print("=" * 60)
            print("VIRTUAL STORE DEMONSTRATION")
            print("=" * 60)
            print()
            demo(storefront)
            print()
            print("=" * 60)
            print("DESIGN PATTERNS USED:")
            print("=" * 60)
            print("1. Factory Method - Products created from a type tag")
            print("2. Observer Pattern - Cart refreshes cart panel and total")
            print("3. Strategy Pattern - No discount / percentage discount")
            print("=" * 60)
    finally:
        storefront.close()


if __name__ == "__main__":
    main()
