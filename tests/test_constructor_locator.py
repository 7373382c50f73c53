"""Tests for ConstructorLocator - finding constructors of marked types."""

from dddcheck.domain.models.syntax import QualifiedTypeName
from dddcheck.domain.models.validation import ConstructorKey
from dddcheck.domain.services.constructor_locator import ConstructorLocator


MONEY = QualifiedTypeName("example.com/shop/domain", "Money")
ORDER = QualifiedTypeName("example.com/shop/domain", "Order")

DOMAIN_FILE = """
package domain

type Money struct{ amount int }

func NewMoney(amount int) Money {
    return Money{amount: amount}
}

func NewMoneyPtr() *Money {
    return &Money{}
}

func NewMoneyOrError() (Money, error) {
    return Money{}, nil
}

func MakeMoney() Money {
    return Money{}
}

func (m Money) NewZero() Money {
    return Money{}
}

func NewCount() int {
    return 0
}
"""


class TestConstructorLocator:
    """Test suite for ConstructorLocator."""

    def setup_method(self):
        self.locator = ConstructorLocator()

    def test_finds_prefixed_functions_returning_type(self, parse_go):
        source = parse_go(DOMAIN_FILE, "domain/money.go")

        constructors = self.locator.locate({MONEY}, [source])

        assert sorted(key.function for key in constructors) == [
            "NewMoney",
            "NewMoneyOrError",
            "NewZero",
        ]
        record = constructors[ConstructorKey("domain/money.go", "NewMoney", MONEY)]
        assert (record.start_line, record.end_line) == (5, 7)
        assert record.type == MONEY
        assert record.file == "domain/money.go"

    def test_custom_prefix(self, parse_go):
        source = parse_go(DOMAIN_FILE, "domain/money.go")

        constructors = ConstructorLocator(prefix="Make").locate({MONEY}, [source])

        assert [key.function for key in constructors] == ["MakeMoney"]

    def test_unmarked_types_are_ignored(self, parse_go):
        source = parse_go(DOMAIN_FILE, "domain/money.go")
        assert self.locator.locate({ORDER}, [source]) == {}
        assert self.locator.locate(set(), [source]) == {}

    def test_constructor_in_another_package(self, parse_go):
        """A constructor may live in a different package than its type."""
        source = parse_go("""
            package app

            import "example.com/shop/domain"

            func NewPrice() domain.Money {
                return domain.Money{}
            }
        """, "app/price.go", "example.com/shop/app")

        constructors = self.locator.locate({MONEY}, [source])

        assert list(constructors) == [ConstructorKey("app/price.go", "NewPrice", MONEY)]

    def test_same_named_type_of_other_package_is_not_a_constructor(self, parse_go):
        source = parse_go("""
            package billing

            type Money struct{}

            func NewMoney() Money {
                return Money{}
            }
        """, "billing/money.go", "example.com/shop/billing")

        assert self.locator.locate({MONEY}, [source]) == {}

    def test_same_function_name_for_two_types(self, parse_go):
        """Keys include the produced type, so records never overwrite each other."""
        money = parse_go("""
            package domain

            func NewValue() Money {
                return Money{}
            }
        """, "domain/money.go")
        order = parse_go("""
            package domain

            func NewValue() Order {
                return Order{}
            }
        """, "domain/order.go")

        constructors = self.locator.locate({MONEY, ORDER}, [money, order])

        assert set(constructors) == {
            ConstructorKey("domain/money.go", "NewValue", MONEY),
            ConstructorKey("domain/order.go", "NewValue", ORDER),
        }
