"""Sample records loaded by `manage.py seed`."""

USERS = [
    {
        "name": "Admin User",
        "email": "admin@example.com",
        "password": "123456",
        "role": "admin",
        "phone": "123-456-7890",
        "address": {
            "street": "123 Admin St",
            "city": "Admin City",
            "state": "AS",
            "postal_code": "12345",
            "country": "USA",
        },
    },
    {
        "name": "John Doe",
        "email": "john@example.com",
        "password": "123456",
        "role": "customer",
        "phone": "123-456-7891",
        "address": {
            "street": "123 John St",
            "city": "John City",
            "state": "JS",
            "postal_code": "12346",
            "country": "USA",
        },
    },
    {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "password": "123456",
        "role": "customer",
        "phone": "123-456-7892",
        "address": {
            "street": "123 Jane St",
            "city": "Jane City",
            "state": "JS",
            "postal_code": "12347",
            "country": "USA",
        },
    },
]

CATEGORIES = [
    {
        "name": "Electronics",
        "description": "Electronic devices and accessories",
        "image": "/images/categories/electronics.jpg",
    },
    {
        "name": "Fashion",
        "description": "Clothing, shoes, and accessories",
        "image": "/images/categories/fashion.jpg",
    },
    {
        "name": "Home & Kitchen",
        "description": "Home appliances and kitchen essentials",
        "image": "/images/categories/home-kitchen.jpg",
    },
    {
        "name": "Beauty & Personal Care",
        "description": "Beauty products and personal care items",
        "image": "/images/categories/beauty.jpg",
    },
]

# Products are assigned to CATEGORIES round-robin by position
PRODUCTS = [
    {
        "name": "Wireless Noise-Cancelling Headphones",
        "description": "Over-ear headphones with active noise cancellation and 30 hours of battery life.",
        "price": 199.99,
        "image": "/images/products/headphones.jpg",
        "brand": "SoundWave",
        "stock": 25,
        "features": ["Active noise cancellation", "30h battery", "Bluetooth 5.3"],
        "specifications": {"weight": "250g", "connectivity": "Bluetooth"},
        "is_featured": True,
    },
    {
        "name": "Classic Denim Jacket",
        "description": "A timeless denim jacket in a relaxed fit.",
        "price": 79.99,
        "image": "/images/products/denim-jacket.jpg",
        "brand": "Bluestone",
        "stock": 40,
        "features": ["100% cotton", "Button front"],
        "specifications": {"fit": "Relaxed", "material": "Denim"},
        "is_featured": False,
    },
    {
        "name": "Stainless Steel Cookware Set",
        "description": "Ten-piece tri-ply cookware set suitable for all hob types.",
        "price": 249.0,
        "image": "/images/products/cookware.jpg",
        "brand": "ChefLine",
        "stock": 15,
        "features": ["Induction compatible", "Dishwasher safe"],
        "specifications": {"pieces": "10", "material": "Stainless steel"},
        "is_featured": True,
    },
    {
        "name": "Hydrating Face Serum",
        "description": "Lightweight hyaluronic acid serum for daily hydration.",
        "price": 29.5,
        "image": "/images/products/serum.jpg",
        "brand": "Glow Lab",
        "stock": 60,
        "features": ["Fragrance free", "Vegan"],
        "specifications": {"volume": "30ml"},
        "is_featured": False,
    },
    {
        "name": "Smartwatch Series 5",
        "description": "Fitness tracking, heart-rate monitoring and notifications on your wrist.",
        "price": 299.0,
        "image": "/images/products/smartwatch.jpg",
        "brand": "Pulse",
        "stock": 10,
        "features": ["GPS", "Water resistant", "Heart-rate monitor"],
        "specifications": {"display": "1.8in AMOLED", "battery": "48h"},
        "is_featured": True,
    },
    {
        "name": "Leather Ankle Boots",
        "description": "Handmade leather boots with a cushioned sole.",
        "price": 129.0,
        "image": "/images/products/boots.jpg",
        "brand": "Strider",
        "stock": 0,
        "features": ["Genuine leather", "Cushioned insole"],
        "specifications": {"heel": "3cm"},
        "is_featured": False,
    },
]
