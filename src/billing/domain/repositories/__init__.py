"""Billing repository protocols."""

from abc import ABC, abstractmethod
from typing import List, Optional

from billing.domain.entities.invoice import Invoice, Payment
from billing.domain.entities.pricing_rule import PricingRule


class PricingRuleRepository(ABC):

    @abstractmethod
    async def add(self, rule: PricingRule) -> PricingRule:
        """Insert; the (organization, course type) pair must be unused."""
        pass

    @abstractmethod
    async def get(self, rule_id: int) -> Optional[PricingRule]:
        pass

    @abstractmethod
    async def find(self, organization_id: int, course_type_id: int) -> Optional[PricingRule]:
        pass

    @abstractmethod
    async def update_price(self, rule: PricingRule) -> None:
        pass

    @abstractmethod
    async def delete(self, rule_id: int) -> bool:
        pass

    @abstractmethod
    async def list_all(self) -> List[PricingRule]:
        pass


class InvoiceRepository(ABC):

    @abstractmethod
    async def add(self, invoice: Invoice) -> Invoice:
        pass

    @abstractmethod
    async def get(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def get_for_update(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def mark_paid(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def list_newest_first(self) -> List[Invoice]:
        pass


class PaymentRepository(ABC):

    @abstractmethod
    async def add(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def list_for_invoice(self, invoice_id: int) -> List[Payment]:
        pass
