"""
Sample menu loaded at startup when ``SEED_MENU`` is enabled.
"""

from typing import Any

SAMPLE_MENU: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Gulab Jamun",
        "category": "sweets",
        "price": 120,
        "description": "Soft, spongy balls soaked in aromatic sugar syrup",
        "emoji": "🍯",
        "rating": 4.8,
        "popular": True,
        "available": True,
        "preparationTime": 15,
    },
    {
        "id": 2,
        "name": "Rasgulla",
        "category": "sweets",
        "price": 100,
        "description": "Spongy cottage cheese balls in light sugar syrup",
        "emoji": "🥛",
        "rating": 4.6,
        "available": True,
        "preparationTime": 10,
    },
    {
        "id": 3,
        "name": "Kaju Katli",
        "category": "sweets",
        "price": 300,
        "description": "Premium cashew fudge with silver leaf",
        "emoji": "💎",
        "rating": 4.9,
        "premium": True,
        "available": True,
        "preparationTime": 20,
    },
    {
        "id": 4,
        "name": "Samosa",
        "category": "snacks",
        "price": 25,
        "description": "Crispy triangular pastry with spiced potato filling",
        "emoji": "🥟",
        "rating": 4.5,
        "available": True,
        "preparationTime": 8,
    },
    {
        "id": 5,
        "name": "Bhel Puri",
        "category": "snacks",
        "price": 40,
        "description": "Mumbai street food with puffed rice and chutneys",
        "emoji": "🥗",
        "rating": 4.3,
        "available": True,
        "preparationTime": 5,
    },
]
