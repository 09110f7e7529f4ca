import pytest

from ordering import (
    AddItem,
    IncorrectItemError,
    Item,
    ItemAppended,
    ItemQuantityIncreased,
    Product,
)
from ordering.testing import OrderScenario

PEN = Product(sku="PEN")
NOTEBOOK = Product(sku="NTB")


def pen(price: float, quantity: int) -> Item:
    return Item(product=PEN, price=price, quantity=quantity)


def test_scenario_with_exact_payload_match():
    with OrderScenario() as scenario:
        scenario.when(pen(10.0, 2)).should_emit(ItemAppended(product=PEN, price=10.0, quantity=2))


def test_scenario_with_type_match():
    with OrderScenario() as scenario:
        scenario.when(pen(10.0, 2)).should_emit(ItemAppended).should_not_raise()


def test_scenario_accepts_commands():
    with OrderScenario() as scenario:
        scenario.when(AddItem(aggregate_id=scenario.order_id, item=pen(10.0, 2))).should_have_lines(
            (PEN, 10.0, 2)
        )


def test_scenario_merges_into_given_line():
    with OrderScenario() as scenario:
        scenario.given_lines((PEN, 10.0, 2)).when(pen(10.0, 3)).should_emit(
            ItemQuantityIncreased(position=0, added_quantity=3, quantity=5)
        ).should_have_lines((PEN, 10.0, 5))


def test_scenario_merge_after_different_price():
    with OrderScenario() as scenario:
        scenario.given_lines((PEN, 15.0, 1), (PEN, 10.0, 2)).when(pen(10.0, 3)).should_have_line(
            PEN, 10.0, 5
        ).should_have_line(PEN, 15.0, 1)


def test_scenario_given_payloads():
    with OrderScenario() as scenario:
        scenario.given(
            ItemAppended(product=PEN, price=10.0, quantity=2),
            ItemQuantityIncreased(position=0, added_quantity=1, quantity=3),
        ).when(Item(product=NOTEBOOK, price=20.0, quantity=1)).should_have_lines(
            (PEN, 10.0, 3), (NOTEBOOK, 20.0, 1)
        )


def test_scenario_expecting_error():
    with OrderScenario() as scenario:
        scenario.when(pen(10.0, 0)).should_raise(IncorrectItemError).should_emit_nothing()


def test_scenario_rejected_item_keeps_lines():
    with OrderScenario() as scenario:
        scenario.given_lines((PEN, 10.0, 2)).when(pen(-1.0, 3)).should_raise(
            IncorrectItemError
        ).should_emit_nothing().should_have_lines((PEN, 10.0, 2))


def test_scenario_continues_after_rejected_item():
    with OrderScenario() as scenario:
        scenario.when(None, pen(10.0, 1)).should_raise(IncorrectItemError).should_emit(
            ItemAppended
        )


def test_scenario_without_context_manager():
    scenario = OrderScenario()
    scenario.when(pen(10.0, 2)).should_emit(ItemAppended)
    scenario.run()

    assert scenario.order.version == 1


def test_scenario_fails_when_expected_event_missing():
    with pytest.raises(AssertionError, match="should emit ItemQuantityIncreased"):
        with OrderScenario() as scenario:
            scenario.when(pen(10.0, 2)).should_emit(ItemQuantityIncreased)


def test_scenario_fails_when_expected_error_missing():
    with pytest.raises(AssertionError, match="should raise IncorrectItemError"):
        with OrderScenario() as scenario:
            scenario.when(pen(10.0, 2)).should_raise(IncorrectItemError)


def test_scenario_fails_when_events_emitted_unexpectedly():
    with pytest.raises(AssertionError, match="should not emit any events"):
        with OrderScenario() as scenario:
            scenario.when(pen(10.0, 2)).should_emit_nothing()


def test_scenario_fails_when_lines_differ():
    with pytest.raises(AssertionError, match="should have lines"):
        with OrderScenario() as scenario:
            scenario.when(pen(10.0, 2), pen(10.0, 3)).should_have_lines(
                (PEN, 10.0, 2), (PEN, 10.0, 3)
            )


def test_scenario_fails_when_line_quantity_differs():
    with pytest.raises(AssertionError, match="should have 4 x"):
        with OrderScenario() as scenario:
            scenario.when(pen(10.0, 2), pen(10.0, 3)).should_have_line(PEN, 10.0, 4)


def test_scenario_does_not_run_when_block_raises():
    with pytest.raises(RuntimeError, match="boom"):
        with OrderScenario() as scenario:
            scenario.should_emit(ItemAppended)
            raise RuntimeError("boom")
