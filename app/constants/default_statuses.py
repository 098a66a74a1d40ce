# app/constants/default_statuses.py
#
# Seed configuration written by the status initializer when the store is
# empty. Approved quotes promote into orders through the payment_pending /
# paid edges.

DEFAULT_QUOTE_STATUSES = [
    {
        "id": "pending",
        "name": "pending",
        "label": "Pending",
        "description": "Quote request is awaiting review",
        "color": "secondary",
        "icon": "Clock",
        "isActive": True,
        "order": 1,
        "allowedTransitions": ["sent", "rejected", "cancelled"],
        "isTerminal": False,
        "category": "quote",
        "triggersEmail": False,
        "requiresAction": True,
        "showsInQuotesList": True,
        "showsInOrdersList": False,
        "canBePaid": False,
        "isDefaultQuoteStatus": True,
        "allowEdit": True,
        "allowAddressEdit": True,
        "allowCancellation": True,
    },
    {
        "id": "sent",
        "name": "sent",
        "label": "Sent",
        "description": "Quote has been sent to customer",
        "color": "outline",
        "icon": "FileText",
        "isActive": True,
        "order": 2,
        "allowedTransitions": ["approved", "rejected", "expired"],
        "autoExpireHours": 168,
        "isTerminal": False,
        "category": "quote",
        "triggersEmail": True,
        "emailTemplate": "quote_sent",
        "requiresAction": False,
        "showsInQuotesList": True,
        "showsInOrdersList": False,
        "canBePaid": False,
        "showExpiration": True,
        "allowApproval": True,
        "allowRejection": True,
        "allowAddressEdit": True,
        "customerMessage": "Your quote is ready for review",
        "customerActionText": "Review Quote",
    },
    {
        "id": "approved",
        "name": "approved",
        "label": "Approved",
        "description": "Customer has approved the quote",
        "color": "default",
        "icon": "CheckCircle",
        "isActive": True,
        "order": 3,
        "allowedTransitions": ["rejected", "payment_pending", "processing", "paid", "cancelled"],
        "isTerminal": False,
        "category": "quote",
        "triggersEmail": True,
        "emailTemplate": "quote_approved",
        "requiresAction": False,
        "showsInQuotesList": True,
        "showsInOrdersList": False,
        "canBePaid": True,
        "allowCartActions": True,
        "allowRejection": True,
        "allowCancellation": True,
        "customerActionText": "Add to Cart",
    },
    {
        "id": "rejected",
        "name": "rejected",
        "label": "Rejected",
        "description": "Quote has been rejected",
        "color": "destructive",
        "icon": "XCircle",
        "isActive": True,
        "order": 4,
        "allowedTransitions": ["approved"],
        "isTerminal": True,
        "category": "quote",
        "triggersEmail": True,
        "emailTemplate": "quote_rejected",
        "requiresAction": False,
        "showsInQuotesList": True,
        "showsInOrdersList": False,
        "canBePaid": False,
        "allowRenewal": True,
    },
    {
        "id": "expired",
        "name": "expired",
        "label": "Expired",
        "description": "Quote has expired",
        "color": "destructive",
        "icon": "AlertTriangle",
        "isActive": True,
        "order": 5,
        "allowedTransitions": ["approved"],
        "isTerminal": True,
        "category": "quote",
        "triggersEmail": True,
        "emailTemplate": "quote_expired",
        "requiresAction": False,
        "showsInQuotesList": True,
        "showsInOrdersList": False,
        "canBePaid": False,
        "allowRenewal": True,
    },
]

DEFAULT_ORDER_STATUSES = [
    {
        "id": "payment_pending",
        "name": "payment_pending",
        "label": "Awaiting Payment",
        "description": "Order placed, awaiting payment verification",
        "color": "outline",
        "icon": "Clock",
        "isActive": True,
        "order": 1,
        "allowedTransitions": ["paid", "ordered", "cancelled"],
        "isTerminal": False,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "bank_transfer_pending",
        "requiresAction": False,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": True,
        "countsAsOrder": True,
        "allowCancellation": True,
        "paymentType": "prepaid",
        "paymentRequiredBefore": "processing",
        "paymentValidationRule": "standard",
        "customerMessage": "Order placed - Please complete payment",
        "customerActionText": "Pay Now",
    },
    {
        "id": "processing",
        "name": "processing",
        "label": "Processing",
        "description": "Order is being processed (Cash on Delivery)",
        "color": "secondary",
        "icon": "RefreshCw",
        "isActive": True,
        "order": 2,
        "allowedTransitions": ["ordered", "shipped", "cancelled"],
        "isTerminal": False,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "cod_order_confirmed",
        "requiresAction": True,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": False,
        "countsAsOrder": True,
        "allowShipping": True,
        "allowCancellation": True,
        "paymentType": "cod",
        "paymentRequiredBefore": "completion",
        "allowCOD": True,
        "isCODStatus": True,
        "codVerificationRequired": True,
        "codCollectionRequired": True,
    },
    {
        "id": "paid",
        "name": "paid",
        "label": "Paid",
        "description": "Payment has been received",
        "color": "default",
        "icon": "DollarSign",
        "isActive": True,
        "order": 3,
        "allowedTransitions": ["ordered", "cancelled"],
        "isTerminal": False,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "payment_received",
        "requiresAction": True,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": False,
        "countsAsOrder": True,
        "allowCancellation": True,
    },
    {
        "id": "ordered",
        "name": "ordered",
        "label": "Ordered",
        "description": "Order has been placed with merchant",
        "color": "default",
        "icon": "ShoppingCart",
        "isActive": True,
        "order": 4,
        "allowedTransitions": ["shipped", "cancelled"],
        "isTerminal": False,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "order_placed",
        "requiresAction": False,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": False,
        "countsAsOrder": True,
        "allowShipping": True,
        "allowCancellation": True,
        "paymentType": "prepaid",
        "paymentRequiredBefore": "shipping",
    },
    {
        "id": "shipped",
        "name": "shipped",
        "label": "Shipped",
        "description": "Order has been shipped",
        "color": "secondary",
        "icon": "Truck",
        "isActive": True,
        "order": 5,
        "allowedTransitions": ["completed", "cancelled"],
        "isTerminal": False,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "order_shipped",
        "requiresAction": False,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": False,
        "countsAsOrder": True,
        "paymentType": "prepaid",
        "paymentRequiredBefore": "completion",
    },
    {
        "id": "completed",
        "name": "completed",
        "label": "Completed",
        "description": "Order has been delivered",
        "color": "outline",
        "icon": "CheckCircle",
        "isActive": True,
        "order": 6,
        "allowedTransitions": [],
        "isTerminal": True,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "order_completed",
        "requiresAction": False,
        "showsInQuotesList": False,
        "showsInOrdersList": True,
        "canBePaid": False,
        "countsAsOrder": True,
        "isSuccessful": True,
        "progressPercentage": 100,
    },
    {
        "id": "cancelled",
        "name": "cancelled",
        "label": "Cancelled",
        "description": "Quote or order has been cancelled",
        "color": "destructive",
        "icon": "XCircle",
        "isActive": True,
        "order": 7,
        "allowedTransitions": [],
        "isTerminal": True,
        "category": "order",
        "triggersEmail": True,
        "emailTemplate": "order_cancelled",
        "requiresAction": False,
        "showsInQuotesList": True,
        "showsInOrdersList": True,
        "canBePaid": False,
    },
]
