"""Tests for the order placement workflow."""
import asyncio
import re
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select, update

from core.application.interfaces import CustomerProfile, ICustomerDirectory
from core.application.services.order_service import OrderApplicationService
from core.application.use_cases.place_order import CartLine, PlaceOrderUseCase
from core.data.models import OrderLineModel, OrderModel, ProductModel
from core.data.repositories.customer_directory_impl import SqlCustomerDirectory
from core.data.repositories.order_repository_impl import SqlAlchemyOrderRepository
from core.domain.exceptions import (
    CollaboratorTimeoutError,
    EmptyCartError,
    OrderCodeExhaustedError,
    OrderValidationError,
    PersistenceError,
    TotalMismatchError,
    UnknownCustomerError,
)
from core.domain.value_objects import OrderCode
from tests.factories import (
    CUSTOMER_EMAIL,
    code_sequence,
    insert_order_row,
    product_stock,
    scenario_command,
)


CODE_FORMAT = re.compile(r"^[A-Z]{2}[0-9]{6}$")


def build_use_case(
    session_factory,
    settings,
    email_sender=None,
    notifier=None,
    directory: Optional[ICustomerDirectory] = None,
    code_generator=OrderCode.generate,
) -> PlaceOrderUseCase:
    return PlaceOrderUseCase(
        session_factory=session_factory,
        customer_directory=directory or SqlCustomerDirectory(session_factory),
        settings=settings,
        email_sender=email_sender,
        notification_service=notifier,
        code_generator=code_generator,
    )


async def count_rows(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


class SlowDirectory(ICustomerDirectory):
    async def get_customer(self, customer_id: str) -> Optional[CustomerProfile]:
        await asyncio.sleep(1)
        return CustomerProfile(id=customer_id, email="late@example.com")


class TestPlaceOrderHappyPath:

    @pytest.mark.asyncio
    async def test_scenario_cart_is_placed(self, session_factory, orders_settings, email_sender, notifier):
        use_case = build_use_case(session_factory, orders_settings, email_sender, notifier)

        result = await use_case.execute(scenario_command())

        assert CODE_FORMAT.match(result.order_code)
        assert result.attempts == 1
        assert not result.needs_reconciliation

        async with session_factory() as session:
            lines = (
                await session.execute(
                    select(OrderLineModel)
                    .where(OrderLineModel.order_id == result.order_id)
                    .order_by(OrderLineModel.id)
                )
            ).scalars().all()
            order = await session.get(OrderModel, result.order_id)

        assert [line.quantity for line in lines] == [2, 1]
        assert [Decimal(str(line.price)) for line in lines] == [Decimal("5000"), Decimal("3000")]
        assert order.status == "pending"
        assert order.order_code == result.order_code
        assert Decimal(str(order.total_amount)) == Decimal("15000")
        assert order.customer_name == "Ayesha Khan"

    @pytest.mark.asyncio
    async def test_confirmation_email_is_sent(self, session_factory, orders_settings, email_sender):
        use_case = build_use_case(session_factory, orders_settings, email_sender)

        result = await use_case.execute(scenario_command())

        assert result.email_sent
        assert len(email_sender.sent) == 1
        message = email_sender.sent[0]
        assert message.to == CUSTOMER_EMAIL
        assert message.subject == f"Order Confirmation #{result.order_code} - TARZIFY"
        assert "Leather Jacket" in message.html
        assert "Cash on Delivery" in message.html

    @pytest.mark.asyncio
    async def test_stock_is_decremented(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)

        await use_case.execute(scenario_command())

        assert await product_stock(session_factory, 1) == 8
        assert await product_stock(session_factory, 2) == 4

    @pytest.mark.asyncio
    async def test_line_keeps_checkout_price(self, session_factory, orders_settings):
        """Catalog price is 5000; the cart price is what gets recorded and kept."""
        use_case = build_use_case(session_factory, orders_settings)
        command = scenario_command(
            lines=[CartLine(product_id=1, quantity=1, unit_price=Decimal("4500"))],
            total=Decimal("4800"),
        )

        result = await use_case.execute(command)

        async with session_factory() as session:
            await session.execute(
                update(ProductModel).where(ProductModel.id == 1).values(price=Decimal("6500"))
            )
            await session.commit()

        service = OrderApplicationService(session_factory, orders_settings)
        order = await service.get_order(result.order_id)
        assert order.lines[0].unit_price.amount == Decimal("4500")

    @pytest.mark.asyncio
    async def test_many_placements_get_distinct_codes(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)
        command = scenario_command(lines=[CartLine(product_id=1, quantity=1, unit_price=Decimal("10"))])

        codes = [(await use_case.execute(command)).order_code for _ in range(20)]

        assert len(set(codes)) == 20
        assert await count_rows(session_factory, OrderModel) == 20

    @pytest.mark.asyncio
    async def test_concurrent_placements_get_distinct_codes(self, file_session_factory, orders_settings):
        use_case = build_use_case(file_session_factory, orders_settings)
        command = scenario_command(lines=[CartLine(product_id=1, quantity=1, unit_price=Decimal("10"))])

        results = await asyncio.gather(
            *(use_case.execute(command) for _ in range(10)), return_exceptions=True
        )

        assert [r for r in results if isinstance(r, Exception)] == []
        assert len({r.order_code for r in results}) == 10
        assert await count_rows(file_session_factory, OrderModel) == 10
        assert await count_rows(file_session_factory, OrderLineModel) == 10
        assert await product_stock(file_session_factory, 1) == 0
        assert not any(r.needs_reconciliation for r in results)


class TestPlaceOrderValidation:

    @pytest.mark.asyncio
    async def test_empty_cart_writes_nothing(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)

        with pytest.raises(EmptyCartError):
            await use_case.execute(scenario_command(lines=[]))

        assert await count_rows(session_factory, OrderModel) == 0
        assert await count_rows(session_factory, OrderLineModel) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("customer_id", [None, "", "   "])
    async def test_missing_customer_is_rejected(self, session_factory, orders_settings, customer_id):
        use_case = build_use_case(session_factory, orders_settings)

        with pytest.raises(UnknownCustomerError):
            await use_case.execute(scenario_command(customer_id=customer_id))

        assert await count_rows(session_factory, OrderModel) == 0

    @pytest.mark.asyncio
    async def test_unknown_customer_is_rejected(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)

        with pytest.raises(UnknownCustomerError, match="ghost"):
            await use_case.execute(scenario_command(customer_id="ghost"))

        assert await count_rows(session_factory, OrderModel) == 0

    @pytest.mark.asyncio
    async def test_zero_quantity_is_rejected(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)
        command = scenario_command(
            lines=[CartLine(product_id=1, quantity=0, unit_price=Decimal("5000"))]
        )

        with pytest.raises(OrderValidationError):
            await use_case.execute(command)

        assert await count_rows(session_factory, OrderModel) == 0

    @pytest.mark.asyncio
    async def test_directory_timeout_aborts(self, session_factory, orders_settings):
        settings = orders_settings.model_copy(update={"directory_timeout_seconds": 0.01})
        use_case = build_use_case(session_factory, settings, directory=SlowDirectory())

        with pytest.raises(CollaboratorTimeoutError):
            await use_case.execute(scenario_command())

        assert await count_rows(session_factory, OrderModel) == 0


class TestTotalCheck:

    @pytest.mark.asyncio
    async def test_warn_accepts_mismatch(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)

        # 13000 of goods + 2000 shipping does not match the 300 COD rate
        result = await use_case.execute(scenario_command())

        assert CODE_FORMAT.match(result.order_code)

    @pytest.mark.asyncio
    async def test_enforce_rejects_mismatch(self, session_factory, orders_settings):
        settings = orders_settings.model_copy(update={"total_check": "enforce"})
        use_case = build_use_case(session_factory, settings)

        with pytest.raises(TotalMismatchError):
            await use_case.execute(scenario_command())

        assert await count_rows(session_factory, OrderModel) == 0

    @pytest.mark.asyncio
    async def test_enforce_accepts_matching_total(self, session_factory, orders_settings):
        settings = orders_settings.model_copy(update={"total_check": "enforce"})
        use_case = build_use_case(session_factory, settings)

        result = await use_case.execute(scenario_command(total=Decimal("13300")))

        assert CODE_FORMAT.match(result.order_code)


class TestCodeCollisionRetry:

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self, session_factory, orders_settings, notifier):
        await insert_order_row(session_factory, "AA111111")
        use_case = build_use_case(
            session_factory,
            orders_settings,
            notifier=notifier,
            code_generator=code_sequence(["AA111111", "AA111111", "BC123456"]),
        )

        result = await use_case.execute(scenario_command())

        assert result.order_code == "BC123456"
        assert result.attempts == 3
        assert await count_rows(session_factory, OrderModel) == 2
        assert notifier.get_notifications() == []

    @pytest.mark.asyncio
    async def test_exhaustion_raises_distinct_error(self, session_factory, orders_settings, notifier):
        await insert_order_row(session_factory, "AA111111")
        use_case = build_use_case(
            session_factory,
            orders_settings,
            notifier=notifier,
            code_generator=code_sequence(["AA111111"] * 3),
        )

        with pytest.raises(OrderCodeExhaustedError) as exc_info:
            await use_case.execute(scenario_command())

        assert exc_info.value.attempts == 3
        assert await count_rows(session_factory, OrderModel) == 1
        assert await count_rows(session_factory, OrderLineModel) == 0
        alerts = notifier.get_notifications()
        assert len(alerts) == 1
        assert alerts[0]["severity"] >= 80

    @pytest.mark.asyncio
    async def test_other_store_errors_are_not_retried(self, session_factory, orders_settings):
        calls = []

        def generator():
            calls.append(1)
            return OrderCode("CD654321")

        use_case = build_use_case(session_factory, orders_settings, code_generator=generator)

        with patch.object(
            SqlAlchemyOrderRepository, "add", AsyncMock(side_effect=PersistenceError("disk full"))
        ):
            with pytest.raises(PersistenceError):
                await use_case.execute(scenario_command())

        assert len(calls) == 1


class TestAtomicity:

    @pytest.mark.asyncio
    async def test_line_failure_leaves_no_order(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)

        with patch.object(
            SqlAlchemyOrderRepository,
            "add_lines",
            AsyncMock(side_effect=PersistenceError("line insert failed")),
        ):
            with pytest.raises(PersistenceError):
                await use_case.execute(scenario_command())

        assert await count_rows(session_factory, OrderModel) == 0
        assert await count_rows(session_factory, OrderLineModel) == 0
        assert await product_stock(session_factory, 1) == 10


class TestBestEffortSideEffects:

    @pytest.mark.asyncio
    async def test_email_failure_is_not_fatal(self, session_factory, orders_settings, email_sender):
        email_sender.send = AsyncMock(side_effect=RuntimeError("smtp down"))
        use_case = build_use_case(session_factory, orders_settings, email_sender)

        result = await use_case.execute(scenario_command())

        assert CODE_FORMAT.match(result.order_code)
        assert not result.email_sent
        assert await product_stock(session_factory, 1) == 8

    @pytest.mark.asyncio
    async def test_customer_without_email_skips_confirmation(
        self, session_factory, orders_settings, email_sender
    ):
        use_case = build_use_case(session_factory, orders_settings, email_sender)

        result = await use_case.execute(scenario_command(customer_id="cust-no-email"))

        assert not result.email_sent
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_insufficient_stock_flags_reconciliation(
        self, session_factory, orders_settings, notifier
    ):
        use_case = build_use_case(session_factory, orders_settings, notifier=notifier)
        command = scenario_command(
            lines=[
                CartLine(product_id=1, quantity=1, unit_price=Decimal("5000")),
                CartLine(product_id=2, quantity=6, unit_price=Decimal("3000")),
            ],
            total=Decimal("23300"),
        )

        result = await use_case.execute(command)

        assert result.needs_reconciliation
        assert [failure.product_id for failure in result.stock_failures] == [2]
        assert await product_stock(session_factory, 1) == 9
        assert await product_stock(session_factory, 2) == 5

        order = await OrderApplicationService(session_factory, orders_settings).get_order(result.order_id)
        assert order.needs_reconciliation
        assert "product 2 x6" in order.reconciliation_note

        alerts = notifier.get_notifications()
        assert len(alerts) == 1
        assert result.order_code in alerts[0]["message"]

    @pytest.mark.asyncio
    async def test_unknown_product_is_reported_not_raised(self, session_factory, orders_settings):
        use_case = build_use_case(session_factory, orders_settings)
        command = scenario_command(
            lines=[CartLine(product_id=999, quantity=1, unit_price=Decimal("100"))],
            total=Decimal("400"),
        )

        result = await use_case.execute(command)

        assert [failure.product_id for failure in result.stock_failures] == [999]
