from prometheus_client import Counter


# Every write the reconciliation engine makes against an order's payments
payment_reconciliation_mutations_total = Counter(
    "payment_reconciliation_mutations_total",
    "Payment mutations issued while reconciling order payments",
    ["operation", "payment_type"],
)

credit_card_voids_total = Counter(
    "payment_credit_card_voids_total", "Credit card authorization voids", ["status"]
)
