"""
Payments app: settlement of cross-border order payments.

This app handles:
- Mediator and bank master data
- Payment records with derived USD/INR fields
- Payment lifecycle (pending with mediator, processing, credited to bank)
- Per-order profit summaries and bulk Paid/Partial/Unpaid classification

Related apps:
    - orders: Order and OrderLine, read for costs and selling prices
    - core: Base models, soft delete, exceptions, BaseService

Usage:
    from payments.services import PaymentService, ProfitService

    payment = PaymentService.create_payment(data)
    summary = ProfitService.get_order_profit_summary(order_id)
"""
