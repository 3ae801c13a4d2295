"""
Starter rule set.

Plain configuration data in the same layout as a JSON rule file. Weights are a
calibration choice: subject hits count more than body hits, sender heuristics
add a smaller push, and general only collects weak conversational cues.
"""

# ============================================================================
# KEYWORD GROUPS
# ============================================================================

URGENT_TERMS = [
    "urgent",
    "asap",
    "as soon as possible",
    "action required",
    "action needed",
    "immediately",
    "time-sensitive",
    "time sensitive",
    "critical",
    "deadline",
    "respond by",
    "high priority",
    "escalation",
]

REQUEST_TERMS = [
    "please review",
    "please confirm",
    "please approve",
    "your approval",
    "sign off",
    "sign-off",
    "can you",
    "could you",
    "meeting request",
    "follow up",
    "following up",
]

FINANCE_TERMS = [
    "invoice",
    "receipt",
    "payment",
    "paid",
    "billing",
    "bill",
    "statement",
    "refund",
    "balance",
    "amount due",
    "payment due",
    "past due",
    "overdue",
    "transaction",
    "wire transfer",
    "bank transfer",
    "payroll",
    "tax",
    "remittance",
    "purchase order",
    "subscription renewal",
]

UPDATE_TERMS = [
    "update",
    "updated",
    "notification",
    "security alert",
    "new sign-in",
    "password reset",
    "verify your email",
    "changes to",
    "terms of service",
    "privacy policy",
    "release notes",
    "status",
    "reminder",
    "has shipped",
    "shipped",
    "delivered",
    "order confirmation",
    "tracking number",
    "weekly report",
    "digest",
]

PROMOTION_TERMS = [
    "sale",
    "discount",
    "deal",
    "deals",
    "offer",
    "limited time",
    "promo",
    "promo code",
    "coupon",
    "free shipping",
    "shop now",
    "buy now",
    "exclusive",
    "newsletter",
    "unsubscribe",
    "black friday",
    "new arrivals",
]

SOCIAL_TERMS = [
    "friend request",
    "invited you",
    "mentioned you",
    "tagged you",
    "commented on",
    "liked your",
    "followed you",
    "new follower",
    "connection request",
    "wants to connect",
    "birthday",
    "rsvp",
    "party",
    "group chat",
]

SOCIAL_DOMAINS = [
    "facebook.com",
    "facebookmail.com",
    "linkedin.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "meetup.com",
    "discord.com",
    "reddit.com",
    "tiktok.com",
    "strava.com",
]

TRAVEL_TERMS = [
    "flight",
    "boarding pass",
    "itinerary",
    "check-in",
    "hotel",
    "reservation",
    "booking",
    "booking confirmation",
    "trip",
    "departure",
    "arrival",
    "rental car",
    "airport",
    "e-ticket",
    "layover",
]

TRAVEL_DOMAINS = [
    "booking.com",
    "expedia.com",
    "airbnb.com",
    "delta.com",
    "united.com",
    "aa.com",
    "lufthansa.com",
    "ryanair.com",
    "marriott.com",
    "hilton.com",
    "kayak.com",
    "trainline.com",
]

PAYMENT_DOMAINS = [
    "paypal.com",
    "stripe.com",
    "chase.com",
    "wise.com",
    "bankofamerica.com",
    "americanexpress.com",
    "intuit.com",
]

SPAM_TERMS = [
    "winner",
    "you have won",
    "you've won",
    "lottery",
    "claim your prize",
    "prize",
    "act now",
    "risk-free",
    "risk free",
    "100% free",
    "miracle",
    "inheritance",
    "bitcoin",
    "crypto",
    "guaranteed",
    "no credit check",
    "click here",
    "account suspended",
    "verify your account",
    "wire the funds",
]

CONVERSATIONAL_TERMS = [
    "hi",
    "hello",
    "hey",
    "thanks",
    "thank you",
    "lunch",
    "coffee",
    "weekend",
    "catch up",
]


# ============================================================================
# RULES
# ============================================================================

STARTER_RULES = [
    # important
    {
        "name": "important.urgent_language",
        "category": "important",
        "fields": ["subject", "preview"],
        "keywords": URGENT_TERMS,
        "weight": 3,
        "explanation": 'Urgent language detected: "{match}"',
    },
    {
        "name": "important.direct_request",
        "category": "important",
        "fields": ["subject", "preview"],
        "keywords": REQUEST_TERMS,
        "weight": 2,
        "explanation": 'Direct request addressed to the reader: "{match}"',
    },
    {
        "name": "important.flagged_subject",
        "category": "important",
        "fields": ["subject"],
        "keywords": ["important", "priority"],
        "weight": 2,
        "explanation": "Subject is flagged as {match}",
    },
    {
        "name": "important.reply_thread",
        "category": "important",
        "fields": ["subject"],
        "pattern": r"^\s*(re|fwd?)\s*:",
        "weight": 1,
        "explanation": "Part of an ongoing conversation ({match})",
    },
    # finance
    {
        "name": "finance.subject_keywords",
        "category": "finance",
        "fields": ["subject"],
        "keywords": FINANCE_TERMS,
        "weight": 3,
        "explanation": 'Financial keyword "{match}" in subject',
    },
    {
        "name": "finance.preview_keywords",
        "category": "finance",
        "fields": ["preview"],
        "keywords": FINANCE_TERMS,
        "weight": 2,
        "explanation": 'Body mentions "{match}"',
    },
    {
        "name": "finance.amount",
        "category": "finance",
        "fields": ["subject", "preview"],
        "pattern": r"[$€£]\s?\d[\d,]*(\.\d{2})?|\b\d[\d,]*(\.\d{2})?\s?(usd|eur|gbp)\b",
        "weight": 1,
        "explanation": "Mentions a monetary amount ({match})",
    },
    {
        "name": "finance.billing_sender",
        "category": "finance",
        "fields": ["sender"],
        "pattern": r"(?<![\w.])(billing|invoices?|accounts|accounting|payments?|finance|payroll|receipts?)@",
        "weight": 2,
        "explanation": "Sent from a billing address ({match})",
    },
    {
        "name": "finance.payment_provider",
        "category": "finance",
        "fields": ["sender_domain"],
        "keywords": PAYMENT_DOMAINS,
        "weight": 2,
        "explanation": "Sender domain {match} is a payment provider",
    },
    # updates
    {
        "name": "updates.notification_keywords",
        "category": "updates",
        "fields": ["subject", "preview"],
        "keywords": UPDATE_TERMS,
        "weight": 2,
        "explanation": 'Notification keyword "{match}" in {field}',
    },
    {
        "name": "updates.automated_sender",
        "category": "updates",
        "fields": ["sender"],
        "pattern": r"(?<![\w.])(no-?reply|do-?not-?reply|notifications?|alerts?|updates?)@",
        "weight": 2,
        "explanation": "Automated sender address ({match})",
    },
    # promotions
    {
        "name": "promotions.marketing_keywords",
        "category": "promotions",
        "fields": ["subject", "preview"],
        "keywords": PROMOTION_TERMS,
        "weight": 2,
        "explanation": 'Marketing keyword "{match}" in {field}',
    },
    {
        "name": "promotions.percent_off",
        "category": "promotions",
        "fields": ["subject", "preview"],
        "pattern": r"\b\d{1,2}\s?%\s?off\b",
        "weight": 3,
        "explanation": "Discount offer ({match})",
    },
    {
        "name": "promotions.marketing_sender",
        "category": "promotions",
        "fields": ["sender"],
        "pattern": r"(?<![\w.])(news|newsletter|marketing|promo|promotions|offers|deals)@",
        "weight": 1,
        "explanation": "Marketing sender address ({match})",
    },
    # social
    {
        "name": "social.activity_keywords",
        "category": "social",
        "fields": ["subject", "preview"],
        "keywords": SOCIAL_TERMS,
        "weight": 2,
        "explanation": 'Social activity: "{match}"',
    },
    {
        "name": "social.network_domain",
        "category": "social",
        "fields": ["sender_domain"],
        "keywords": SOCIAL_DOMAINS,
        "weight": 3,
        "explanation": "Sender domain {match} is a social network",
    },
    # travel
    {
        "name": "travel.trip_keywords",
        "category": "travel",
        "fields": ["subject", "preview"],
        "keywords": TRAVEL_TERMS,
        "weight": 3,
        "explanation": 'Travel keyword "{match}" in {field}',
    },
    {
        "name": "travel.provider_domain",
        "category": "travel",
        "fields": ["sender_domain"],
        "keywords": TRAVEL_DOMAINS,
        "weight": 3,
        "explanation": "Sender domain {match} is a travel provider",
    },
    # spam
    {
        "name": "spam.scam_keywords",
        "category": "spam",
        "fields": ["subject", "preview"],
        "keywords": SPAM_TERMS,
        "weight": 3,
        "explanation": 'Common scam phrase "{match}"',
    },
    {
        "name": "spam.excessive_punctuation",
        "category": "spam",
        "fields": ["subject"],
        "pattern": r"[!?$]{3,}",
        "weight": 2,
        "explanation": "Excessive punctuation in subject ({match})",
    },
    {
        "name": "spam.high_risk_domain",
        "category": "spam",
        "fields": ["sender_domain"],
        "pattern": r"\.(xyz|top|click|loan|win|biz|ru)$",
        "weight": 2,
        "explanation": "Sender uses a high-risk domain ending ({match})",
    },
    # general
    {
        "name": "general.conversational",
        "category": "general",
        "fields": ["subject", "preview"],
        "keywords": CONVERSATIONAL_TERMS,
        "weight": 1,
        "explanation": 'Conversational tone ("{match}")',
    },
]
