"""
Static menu and FAQ content.

Breads are baked per order (made_to_order); pastries and cakes come from
the day's ready-made stock.
"""
from decimal import Decimal

from bakery.models.menu import DietaryInfo, FaqEntry, MenuItem

MENU_ITEMS: list[MenuItem] = [
    # ── Breads (made to order) ────────────────────────────────
    MenuItem(
        id="sourdough-bread",
        name="Classic Sourdough",
        category="Breads",
        description=(
            "Our signature sourdough bread with a crispy crust and tender, airy crumb. "
            "Made with organic flour and our house sourdough starter."
        ),
        price=Decimal("8.50"),
        dietary_info=DietaryInfo(vegan=True, dairy_free=True),
        made_to_order=True,
    ),
    MenuItem(
        id="french-onion-sourdough",
        name="French Onion Sourdough",
        category="Breads",
        description="Sourdough folded with slow-caramelized onions and aged gruyère.",
        price=Decimal("12.00"),
        made_to_order=True,
    ),
    MenuItem(
        id="country-loaf",
        name="Country Loaf",
        category="Breads",
        description=(
            "Rustic country-style bread with a mix of white and whole wheat flours. "
            "Perfect for sandwiches or as a side with dinner."
        ),
        price=Decimal("7.50"),
        dietary_info=DietaryInfo(vegan=True, dairy_free=True),
        made_to_order=True,
    ),
    MenuItem(
        id="cinnamon-raisin",
        name="Cinnamon Raisin Bread",
        category="Breads",
        description=(
            "Soft and slightly sweet bread packed with plump raisins and swirled with "
            "cinnamon. Delicious toasted with butter."
        ),
        price=Decimal("9.00"),
        dietary_info=DietaryInfo(dairy_free=True),
        made_to_order=True,
    ),
    MenuItem(
        id="focaccia",
        name="Rosemary Focaccia",
        category="Breads",
        description="Italian-style focaccia brushed with olive oil and topped with fresh rosemary and sea salt.",
        price=Decimal("8.00"),
        dietary_info=DietaryInfo(vegan=True, dairy_free=True),
        made_to_order=True,
    ),
    # ── Pastries (in stock) ───────────────────────────────────
    MenuItem(
        id="chocolate-chip-cookies",
        name="Chocolate Chip Cookies",
        category="Pastries",
        description="Classic chocolate chip cookies made with premium chocolate chunks and a hint of sea salt.",
        price=Decimal("3.50"),
        stock=24,
    ),
    MenuItem(
        id="blueberry-muffins",
        name="Blueberry Muffins",
        category="Pastries",
        description="Tender muffins bursting with fresh blueberries and topped with a crunchy streusel.",
        price=Decimal("3.50"),
        stock=12,
    ),
    MenuItem(
        id="almond-croissant",
        name="Almond Croissant",
        category="Pastries",
        description="Flaky croissant filled with rich almond cream and topped with sliced almonds.",
        price=Decimal("4.50"),
        stock=6,
    ),
    MenuItem(
        id="cinnamon-roll",
        name="Cinnamon Roll",
        category="Pastries",
        description="Soft, swirled cinnamon rolls topped with cream cheese frosting.",
        price=Decimal("4.00"),
        stock=8,
    ),
    # ── Cakes (in stock) ──────────────────────────────────────
    MenuItem(
        id="banana-bread",
        name="Banana Bread",
        category="Cakes",
        description="Moist banana bread made with ripe bananas and a hint of cinnamon.",
        price=Decimal("6.00"),
        stock=2,
    ),
    MenuItem(
        id="carrot-cake",
        name="Carrot Cake",
        category="Cakes",
        description="Spiced carrot cake with cream cheese frosting and chopped walnuts.",
        price=Decimal("5.50"),
        stock=4,
    ),
    MenuItem(
        id="lemon-tart",
        name="Lemon Tart",
        category="Cakes",
        description="Tangy lemon curd in a buttery shortbread crust.",
        price=Decimal("5.00"),
        stock=0,
    ),
    MenuItem(
        id="vegan-choc-cake",
        name="Vegan Chocolate Cake",
        category="Cakes",
        description="Rich chocolate cake made without animal products. You won't believe it's vegan!",
        price=Decimal("6.50"),
        dietary_info=DietaryInfo(vegan=True, dairy_free=True),
        stock=3,
    ),
    MenuItem(
        id="gluten-free-brownies",
        name="Gluten-Free Brownies",
        category="Cakes",
        description="Fudgy brownies made with almond flour.",
        price=Decimal("4.00"),
        dietary_info=DietaryInfo(gluten_free=True),
        available=False,
        stock=5,
    ),
]

FAQ_ENTRIES: list[FaqEntry] = [
    FaqEntry(
        question="How do I place an order?",
        answer=(
            "You can place an order through our website by selecting items from our menu and "
            "following the checkout process. All orders must be placed at least 24 hours in advance."
        ),
    ),
    FaqEntry(
        question="What are your pickup times?",
        answer=(
            "Ready-made pastries and cakes can be picked up Monday to Friday between 12:00 PM and "
            "6:00 PM. Made-to-order breads are available Thursday to Saturday between 9:00 AM and 6:00 PM."
        ),
    ),
    FaqEntry(
        question="Do you offer delivery?",
        answer="Currently, we only offer pickup service.",
    ),
    FaqEntry(
        question="What is your order deadline?",
        answer=(
            "Orders close Wednesdays at 6pm for Saturday pickup. This ensures we have enough time "
            "to prepare your fresh baked goods."
        ),
    ),
    FaqEntry(
        question="Do you accommodate dietary restrictions?",
        answer=(
            "Yes! We offer various options for dietary restrictions including vegan, gluten-free, "
            "dairy-free, and nut-free items. These are clearly marked on our menu."
        ),
    ),
    FaqEntry(
        question="How do I place a bulk order?",
        answer=(
            "For bulk orders (10+ items), please use our bulk order inquiry form. This allows us to "
            "better accommodate larger orders and discuss any special requirements."
        ),
    ),
    FaqEntry(
        question="What payment methods do you accept?",
        answer="We accept cash and credit cards at pickup. Payment is collected when you pick up your order.",
    ),
    FaqEntry(
        question="Can I modify or cancel my order?",
        answer=(
            "Orders can be modified or cancelled up until the order deadline. Please contact us as "
            "soon as possible if you need to make changes."
        ),
    ),
    FaqEntry(
        question="How long do your products stay fresh?",
        answer=(
            "Our products are best enjoyed within 2-3 days of pickup. We recommend storing them in "
            "an airtight container at room temperature."
        ),
    ),
]
