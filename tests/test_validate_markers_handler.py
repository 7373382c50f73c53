"""
Tests for ValidateMarkersHandler - the end-to-end pipeline over a tree on disk.
"""

import threading
from pathlib import Path

import pytest

from dddcheck.application.commands.validate_markers import (
    ValidateMarkersCommand,
    create_handler,
    validate,
)
from dddcheck.domain.exceptions import RootPathError, ValidationCancelledError
from dddcheck.domain.models.syntax import QualifiedTypeName
from dddcheck.domain.services.marker_registry import MarkerRegistry


REGISTRY = MarkerRegistry()
VALUE_OBJECT = REGISTRY.get_marker("value_object")
ENTITY = REGISTRY.get_marker("entity")
COMMAND = REGISTRY.get_marker("command")
MONEY = QualifiedTypeName("example.com/shop/domain", "Money")


@pytest.fixture
def shop(go_tree):
    """A small module with one value object and one entity."""
    go_tree.write("domain/money.go", """
        package domain

        import "VO_PKG"

        type Money struct {
            amount int
            _      valueobject.ValueObject
        }

        func NewMoney(amount int) Money {
            m := Money{}
            m.amount = amount
            return m
        }
    """)
    go_tree.write("domain/customer.go", """
        package domain

        import "ENTITY_PKG"

        type Customer struct {
            id string
            _  entity.Entity
        }

        func NewCustomer(id string) Customer {
            return Customer{id: id}
        }
    """)
    go_tree.write("app/checkout.go", """
        package app

        import "example.com/shop/domain"

        func Checkout() domain.Money {
            total := domain.Money{}
            return total
        }
    """)
    go_tree.write("app/checkout_test.go", """
        package app

        import "example.com/shop/domain"

        func fixture() domain.Money {
            return domain.Money{}
        }
    """)
    go_tree.write("vendor/example.com/lib/lib.go", """
        package lib

        import "example.com/shop/domain"

        func Zero() domain.Money {
            return domain.Money{}
        }
    """)
    return go_tree


class TestValidateMarkersHandler:
    """Test suite for the validation pipeline."""

    def setup_method(self):
        self.handler = create_handler()

    def run(self, root: Path, *markers, workers: int = 4):
        return self.handler.handle(ValidateMarkersCommand(
            root_path=root,
            markers=list(markers),
            max_workers=workers,
        ))

    def test_value_object_report(self, shop):
        run = self.run(shop.root, VALUE_OBJECT)
        report = run.get_outcome("value_object").report

        assert report.types == {MONEY}
        assert [c.function for c in report.sorted_constructors()] == ["NewMoney"]
        assert [v.render() for v in report.sorted_violations()] == [
            f"VIOLATION: ValueObject example.com/shop/domain.Money at {shop.path('app/checkout.go')}:6"
        ]
        assert run.files_analyzed == 3
        assert run.completed_at is not None

    def test_kinds_are_validated_independently(self, shop):
        run = self.run(shop.root, VALUE_OBJECT, ENTITY, COMMAND)

        assert [o.marker.kind for o in run.outcomes] == ["value_object", "entity", "command"]
        entity = run.get_outcome("entity").report
        assert entity.types == {QualifiedTypeName("example.com/shop/domain", "Customer")}
        assert not entity.has_violations
        assert run.get_outcome("command").report is None
        assert run.total_violations == 1

    def test_type_marked_twice(self, go_tree):
        go_tree.write("orders/order.go", """
            package orders

            import (
                "COMMAND_PKG"
                "ENTITY_PKG"
            )

            type PlaceOrder struct {
                _ entity.Entity
                _ commands.Command
            }

            func Place() {
                _ = PlaceOrder{}
            }
        """)

        run = self.run(go_tree.root, ENTITY, COMMAND)

        for kind, label in (("entity", "Entity"), ("command", "Command")):
            report = run.get_outcome(kind).report
            assert report.types == {QualifiedTypeName("example.com/shop/orders", "PlaceOrder")}
            assert [v.render() for v in report.sorted_violations()] == [
                f"VIOLATION: {label} example.com/shop/orders.PlaceOrder at {go_tree.path('orders/order.go')}:14"
            ]

    def test_empty_tree_has_no_report(self, go_tree):
        run = self.run(go_tree.root, VALUE_OBJECT)

        assert run.outcomes[0].report is None
        assert not run.has_violations
        assert run.files_analyzed == 0

    def test_tree_without_marked_types(self, go_tree):
        go_tree.write("main.go", """
            package main

            type Config struct{}

            func main() {
                _ = Config{}
            }
        """)

        assert validate(VALUE_OBJECT, go_tree.root) is None

    def test_validate_entry_point(self, shop):
        report = validate(VALUE_OBJECT, shop.root)

        assert report is not None
        assert report.marker == VALUE_OBJECT
        assert len(report.violations) == 1

    def test_worker_count_does_not_change_result(self, shop):
        single = self.run(shop.root, VALUE_OBJECT, ENTITY, workers=1)
        many = self.run(shop.root, VALUE_OBJECT, ENTITY, workers=8)

        for kind in ("value_object", "entity"):
            assert single.get_outcome(kind).report.to_dict() == many.get_outcome(kind).report.to_dict()

    def test_missing_root(self, tmp_path):
        with pytest.raises(RootPathError):
            self.run(tmp_path / "missing", VALUE_OBJECT)

    def test_cancelled_run(self, shop):
        event = threading.Event()
        event.set()

        with pytest.raises(ValidationCancelledError):
            self.handler.handle(ValidateMarkersCommand(
                root_path=shop.root,
                markers=[VALUE_OBJECT],
                cancel_event=event,
            ))
