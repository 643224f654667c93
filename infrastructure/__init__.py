"""
Infrastructure Package
======================

Abstraction layers over everything the storefront talks to.

Modules:
    - commerce: Remote commerce platform client (buyers, products, orders, payments)
    - exchange_rates: Currency conversion rates (HTTP API, static table)
    - payments: Credit card processor (Stripe, mock)
    - email: Outgoing mail (SMTP, mock)
    - cache: Get-or-add cache over Django's cache framework
    - observability: OpenTelemetry tracing
    - container: Lazily built collaborators and domain services
"""
