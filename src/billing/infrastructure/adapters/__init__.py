from billing.infrastructure.adapters.invoice_notifier import InvoiceNotifier, LoggingInvoiceNotifier

__all__ = ["InvoiceNotifier", "LoggingInvoiceNotifier"]
