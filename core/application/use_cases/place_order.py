"""
Place Order Use Case.

Checkout entry point: turns a cart into a persisted, uniquely-coded order.

Flow:
1. Validate customer, cart and total (no writes)
2. Allocate an order code (insert with collision retry)
3. Insert the order lines in the same transaction
4. Send the confirmation email (best-effort)
5. Decrement stock per line (best-effort, flags reconciliation)
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, List, Optional
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import (
    CustomerProfile,
    ICustomerDirectory,
    IEmailSender,
    INotificationService,
)
from core.application.services.order_confirmation import StoreInfo, render_order_confirmation
from core.application.services.shipping_rates import shipping_cost
from core.application.services.timeouts import with_timeout
from core.data.uow import create_uow
from core.domain.entities.order import Order, OrderLine
from core.domain.enums import PaymentMethod
from core.domain.exceptions import (
    DuplicateOrderCodeError,
    EmptyCartError,
    OrderCodeExhaustedError,
    OrderValidationError,
    TotalMismatchError,
    UnknownCustomerError,
)
from core.domain.value_objects import ExecutionID, Money, OrderCode
from core.settings.modules.orders_settings import OrdersSettings


logger = logging.getLogger(__name__)


# =============================================================================
# REQUEST / RESPONSE (Application Layer)
# =============================================================================

@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: Decimal
    product_name: Optional[str] = None


@dataclass
class PlaceOrderCommand:
    """
    Input for the place order use case.

    This is application-level request (not API-level).
    """
    customer_id: Optional[str]
    lines: List[CartLine]
    total: Decimal
    shipping_address: str
    phone: str
    payment_method: PaymentMethod = PaymentMethod.FASTPAY
    customer_name: Optional[str] = None


@dataclass(frozen=True)
class StockFailure:
    product_id: int
    quantity: int
    reason: str


@dataclass
class PlaceOrderResult:
    """Outcome of a successful placement."""
    execution_id: ExecutionID
    order_code: str
    order_id: int
    attempts: int
    email_sent: bool = False
    stock_failures: List[StockFailure] = field(default_factory=list)

    @property
    def needs_reconciliation(self) -> bool:
        return bool(self.stock_failures)


# =============================================================================
# USE CASE
# =============================================================================

class PlaceOrderUseCase:
    """
    Use case for placing a storefront order.

    The order and its lines are written atomically. Email and stock
    updates happen after commit and never undo a placed order.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        customer_directory: ICustomerDirectory,
        settings: OrdersSettings,
        email_sender: Optional[IEmailSender] = None,
        notification_service: Optional[INotificationService] = None,
        store: Optional[StoreInfo] = None,
        code_generator: Callable[[], OrderCode] = OrderCode.generate,
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_factory: SQLAlchemy async session factory
            customer_directory: Resolves customer ids to profiles
            settings: Order pipeline settings (attempts, policies, timeouts)
            email_sender: Confirmation email transport (None disables email)
            notification_service: Operator alert channel
            store: Store identity printed on the receipt
            code_generator: Source of candidate order codes
        """
        self._session_factory = session_factory
        self._customer_directory = customer_directory
        self._settings = settings
        self._email_sender = email_sender
        self._notification_service = notification_service
        self._store = store or StoreInfo()
        self._generate_code = code_generator

    async def execute(self, command: PlaceOrderCommand) -> PlaceOrderResult:
        """
        Execute the placement workflow.

        Returns:
            PlaceOrderResult with the public order code

        Raises:
            OrderValidationError: Bad customer, cart or total (nothing written)
            OrderCodeExhaustedError: Every code attempt collided
            PersistenceError: Store failure or timeout
        """
        execution_id = ExecutionID.generate()
        logger.info(
            f"[{execution_id}] Placing order for customer {command.customer_id} "
            f"({len(command.lines)} line(s))"
        )

        # ================================================================
        # STEP 1: Validate (no writes)
        # ================================================================
        lines, total = self._validate_cart(command)
        profile = await self._resolve_customer(command.customer_id)
        self._check_total(execution_id, lines, total, command.payment_method)

        # ================================================================
        # STEP 2 + 3: Allocate code, insert order and lines atomically
        # ================================================================
        order, attempts = await self._persist(execution_id, command, profile, lines, total)
        logger.info(
            f"[{execution_id}] ✅ Order {order.order_code} persisted "
            f"(id={order.id}, attempts={attempts})"
        )

        result = PlaceOrderResult(
            execution_id=execution_id,
            order_code=order.order_code.value,
            order_id=order.id,
            attempts=attempts,
        )

        # ================================================================
        # STEP 4: Confirmation email (best-effort)
        # ================================================================
        product_names = {
            line.product_id: line.product_name for line in command.lines if line.product_name
        }
        result.email_sent = await self._send_confirmation(
            execution_id, order, profile, product_names
        )

        # ================================================================
        # STEP 5: Stock decrement (best-effort, compensable)
        # ================================================================
        result.stock_failures = await self._decrement_stock(execution_id, order)
        if result.stock_failures:
            await self._flag_for_reconciliation(execution_id, order, result.stock_failures)

        logger.info(f"[{execution_id}] ✅ Order {order.order_code} placed")
        return result

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------

    def _validate_cart(self, command: PlaceOrderCommand):
        if not command.customer_id or not command.customer_id.strip():
            raise UnknownCustomerError(None)
        if not command.lines:
            raise EmptyCartError()

        currency = self._settings.currency
        lines = [
            OrderLine(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=Money(amount=line.unit_price, currency=currency),
            )
            for line in command.lines
        ]

        total = Money(amount=command.total, currency=currency)
        if total.is_negative():
            raise OrderValidationError("Order total cannot be negative")
        if not (command.shipping_address or "").strip():
            raise OrderValidationError("Shipping address is required")
        if not (command.phone or "").strip():
            raise OrderValidationError("Phone number is required")

        return lines, total

    async def _resolve_customer(self, customer_id: str) -> CustomerProfile:
        profile = await with_timeout(
            self._customer_directory.get_customer(customer_id),
            self._settings.directory_timeout_seconds,
            "customer lookup",
        )
        if profile is None:
            raise UnknownCustomerError(customer_id)
        return profile

    def _check_total(
        self,
        execution_id: ExecutionID,
        lines: List[OrderLine],
        total: Money,
        payment_method: PaymentMethod,
    ) -> None:
        mode = self._settings.total_check
        if mode == "off":
            return

        expected = shipping_cost(payment_method, total.currency)
        for line in lines:
            expected = expected + line.line_total

        if abs(total.amount - expected.amount) <= self._settings.total_tolerance:
            return

        if mode == "enforce":
            logger.warning(
                f"[{execution_id}] ❌ Rejecting order: total {total} != expected {expected}"
            )
            raise TotalMismatchError(total.amount, expected.amount)

        logger.warning(
            f"[{execution_id}] Total mismatch accepted: supplied {total}, "
            f"computed {expected} (lines + {payment_method.value} shipping)"
        )

    # -----------------------------------------------------------------
    # Persistence
    # -----------------------------------------------------------------

    async def _persist(
        self,
        execution_id: ExecutionID,
        command: PlaceOrderCommand,
        profile: CustomerProfile,
        lines: List[OrderLine],
        total: Money,
    ):
        max_attempts = self._settings.code_max_attempts
        timeout = self._settings.record_store_timeout_seconds

        async with create_uow(self._session_factory, execution_id) as uow:
            for attempt in range(1, max_attempts + 1):
                order = Order.place(
                    order_code=self._generate_code(),
                    customer_id=command.customer_id,
                    total=total,
                    shipping_address=command.shipping_address.strip(),
                    phone=command.phone.strip(),
                    payment_method=command.payment_method,
                    customer_name=command.customer_name or profile.full_name,
                )

                try:
                    created = await with_timeout(uow.orders.add(order), timeout, "order insert")
                except DuplicateOrderCodeError as e:
                    logger.warning(
                        f"[{execution_id}] Order code collision on attempt "
                        f"{attempt}/{max_attempts}: {e.order_code}"
                    )
                    await uow.rollback()
                    continue

                created.lines = await with_timeout(
                    uow.orders.add_lines(created.id, lines), timeout, "order line insert"
                )
                await with_timeout(uow.commit(), timeout, "order commit")
                return created, attempt

        logger.error(
            f"[{execution_id}] ❌ Could not allocate order code after {max_attempts} attempts"
        )
        await self._alert(
            f"Order code allocation exhausted after {max_attempts} attempts "
            f"(customer {command.customer_id}, execution {execution_id})",
            severity=90,
        )
        raise OrderCodeExhaustedError(max_attempts)

    # -----------------------------------------------------------------
    # Best-effort side effects
    # -----------------------------------------------------------------

    async def _send_confirmation(
        self,
        execution_id: ExecutionID,
        order: Order,
        profile: CustomerProfile,
        product_names: Dict[int, str],
    ) -> bool:
        if self._email_sender is None:
            logger.info(f"[{execution_id}] Email disabled, skipping confirmation")
            return False
        if not profile.email:
            logger.warning(
                f"[{execution_id}] No email on file for customer {profile.id}, skipping confirmation"
            )
            return False

        message = render_order_confirmation(order, profile.email, self._store, product_names)
        try:
            await with_timeout(
                self._email_sender.send(message),
                self._settings.email_timeout_seconds,
                "confirmation email",
            )
        except Exception as e:
            logger.warning(
                f"[{execution_id}] Confirmation email for {order.order_code} failed: {e}",
                exc_info=True,
            )
            return False

        logger.info(f"[{execution_id}] ✅ Confirmation email sent to {profile.email}")
        return True

    async def _decrement_stock(self, execution_id: ExecutionID, order: Order) -> List[StockFailure]:
        failures = []
        for line in order.lines:
            try:
                async with create_uow(self._session_factory, execution_id) as uow:
                    await with_timeout(
                        uow.products.decrement_stock(line.product_id, line.quantity),
                        self._settings.stock_timeout_seconds,
                        "stock decrement",
                    )
                    await uow.commit()
            except Exception as e:
                logger.warning(
                    f"[{execution_id}] Stock decrement failed for product "
                    f"{line.product_id} x{line.quantity}: {e}",
                    exc_info=True,
                )
                failures.append(
                    StockFailure(product_id=line.product_id, quantity=line.quantity, reason=str(e))
                )
        return failures

    async def _flag_for_reconciliation(
        self,
        execution_id: ExecutionID,
        order: Order,
        failures: List[StockFailure],
    ) -> None:
        note = "; ".join(
            f"product {failure.product_id} x{failure.quantity}: {failure.reason}"
            for failure in failures
        )
        order.flag_for_reconciliation(note)

        try:
            async with create_uow(self._session_factory, execution_id) as uow:
                await with_timeout(
                    uow.orders.mark_for_reconciliation(order.id, note),
                    self._settings.record_store_timeout_seconds,
                    "reconciliation flag",
                )
                await uow.commit()
        except Exception as e:
            logger.error(
                f"[{execution_id}] ❌ Could not flag order {order.order_code} for reconciliation: {e}",
                exc_info=True,
            )

        await self._alert(
            f"Order {order.order_code} needs stock reconciliation: {note}",
            severity=60,
        )

    async def _alert(self, message: str, severity: int) -> None:
        if self._notification_service is None:
            return
        try:
            await self._notification_service.notify(message, severity=severity)
        except Exception as e:
            logger.warning(f"Operator alert failed: {e}")
