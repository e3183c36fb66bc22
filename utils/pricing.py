PRICING_TIERS = [
    {
        "name": "Free",
        "price": "$0",
        "uses": "5 uses",
        "features": [
            "5 free watermark removals",
            "Basic image processing",
            "Standard quality output",
        ],
    },
    {
        "name": "Pro",
        "price": "$5",
        "uses": "100 uses",
        "features": [
            "100 watermark removals",
            "Advanced image processing",
            "High quality output",
            "Priority support",
        ],
    },
    {
        "name": "Unlimited",
        "price": "$15",
        "uses": "Unlimited",
        "features": [
            "Unlimited watermark removals",
            "Premium image processing",
            "Highest quality output",
            "Priority support",
            "Batch processing",
        ],
    },
]

FEATURED_TIER = "Pro"
