"""Bundled food reference table with nutrition values per 100 g."""

from health_tracker.domain.foods import FoodReferenceItem

FOOD_CATEGORIES = (
    "All",
    "Protein",
    "Grains",
    "Vegetables",
    "Fruits",
    "Dairy",
    "Legumes",
    "Nuts",
    "Beverages",
    "Indian",
    "Fast Food",
)


def _food(  # noqa: PLR0913
    food_id: str,
    name: str,
    category: str,
    calories: float,
    protein_g: float,
    carbs_g: float,
    fats_g: float,
    fiber_g: float,
    serving_size_g: float,
) -> FoodReferenceItem:
    return FoodReferenceItem(
        id=food_id,
        name=name,
        category=category,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fats_g=fats_g,
        fiber_g=fiber_g,
        serving_size_g=serving_size_g,
    )


FOOD_DATABASE: tuple[FoodReferenceItem, ...] = (
    _food(
        "chicken-breast", "Chicken Breast (Grilled)", "Protein", 165, 31, 0, 3.6, 0, 150
    ),
    _food("chicken-thigh", "Chicken Thigh", "Protein", 209, 26, 0, 11, 0, 100),
    _food("salmon", "Salmon (Baked)", "Protein", 208, 20, 0, 13, 0, 150),
    _food("tuna", "Tuna (Canned)", "Protein", 116, 26, 0, 1, 0, 100),
    _food("eggs", "Eggs (Boiled)", "Protein", 155, 13, 1.1, 11, 0, 50),
    _food("egg-white", "Egg White", "Protein", 52, 11, 0.7, 0.2, 0, 33),
    _food("beef", "Beef (Lean)", "Protein", 250, 26, 0, 15, 0, 100),
    _food("paneer", "Paneer", "Protein", 265, 18, 1.2, 21, 0, 100),
    _food("tofu", "Tofu", "Protein", 76, 8, 1.9, 4.8, 0.3, 100),
    _food("greek-yogurt", "Greek Yogurt", "Protein", 97, 9, 3.6, 5, 0, 150),
    _food("rice-white", "White Rice (Cooked)", "Grains", 130, 2.7, 28, 0.3, 0.4, 150),
    _food("rice-brown", "Brown Rice (Cooked)", "Grains", 111, 2.6, 23, 0.9, 1.8, 150),
    _food("oats", "Oatmeal (Cooked)", "Grains", 68, 2.4, 12, 1.4, 1.7, 250),
    _food("bread-wheat", "Whole Wheat Bread", "Grains", 247, 13, 41, 3.4, 7, 30),
    _food("bread-white", "White Bread", "Grains", 265, 9, 49, 3.2, 2.7, 30),
    _food("pasta", "Pasta (Cooked)", "Grains", 131, 5, 25, 1.1, 1.8, 200),
    _food("quinoa", "Quinoa (Cooked)", "Grains", 120, 4.4, 21, 1.9, 2.8, 150),
    _food("roti", "Roti/Chapati", "Grains", 297, 9, 50, 7.5, 4, 40),
    _food("broccoli", "Broccoli", "Vegetables", 34, 2.8, 7, 0.4, 2.6, 100),
    _food("spinach", "Spinach", "Vegetables", 23, 2.9, 3.6, 0.4, 2.2, 100),
    _food("carrots", "Carrots", "Vegetables", 41, 0.9, 10, 0.2, 2.8, 100),
    _food("tomatoes", "Tomatoes", "Vegetables", 18, 0.9, 3.9, 0.2, 1.2, 100),
    _food("cucumber", "Cucumber", "Vegetables", 16, 0.7, 3.6, 0.1, 0.5, 100),
    _food("onion", "Onion", "Vegetables", 40, 1.1, 9, 0.1, 1.7, 100),
    _food("potato", "Potato (Boiled)", "Vegetables", 87, 1.9, 20, 0.1, 1.8, 150),
    _food("sweet-potato", "Sweet Potato", "Vegetables", 86, 1.6, 20, 0.1, 3, 150),
    _food("apple", "Apple", "Fruits", 52, 0.3, 14, 0.2, 2.4, 180),
    _food("banana", "Banana", "Fruits", 89, 1.1, 23, 0.3, 2.6, 120),
    _food("orange", "Orange", "Fruits", 47, 0.9, 12, 0.1, 2.4, 150),
    _food("mango", "Mango", "Fruits", 60, 0.8, 15, 0.4, 1.6, 150),
    _food("grapes", "Grapes", "Fruits", 69, 0.7, 18, 0.2, 0.9, 100),
    _food("watermelon", "Watermelon", "Fruits", 30, 0.6, 8, 0.2, 0.4, 200),
    _food("milk-whole", "Milk (Whole)", "Dairy", 61, 3.2, 4.8, 3.3, 0, 250),
    _food("milk-skim", "Milk (Skim)", "Dairy", 34, 3.4, 5, 0.1, 0, 250),
    _food("cheese", "Cheese (Cheddar)", "Dairy", 403, 25, 1.3, 33, 0, 30),
    _food("butter", "Butter", "Dairy", 717, 0.9, 0.1, 81, 0, 10),
    _food("lentils", "Lentils (Cooked)", "Legumes", 116, 9, 20, 0.4, 7.9, 150),
    _food("chickpeas", "Chickpeas (Cooked)", "Legumes", 164, 8.9, 27, 2.6, 7.6, 150),
    _food("kidney-beans", "Kidney Beans", "Legumes", 127, 8.7, 23, 0.5, 6.4, 150),
    _food("dal", "Dal (Cooked)", "Legumes", 104, 7, 18, 0.4, 5, 200),
    _food("almonds", "Almonds", "Nuts", 579, 21, 22, 50, 12, 30),
    _food("peanuts", "Peanuts", "Nuts", 567, 26, 16, 49, 8.5, 30),
    _food("walnuts", "Walnuts", "Nuts", 654, 15, 14, 65, 6.7, 30),
    _food("cashews", "Cashews", "Nuts", 553, 18, 30, 44, 3.3, 30),
    _food("coffee", "Coffee (Black)", "Beverages", 2, 0.3, 0, 0, 0, 250),
    _food("tea", "Tea (No Sugar)", "Beverages", 1, 0, 0.3, 0, 0, 250),
    _food("orange-juice", "Orange Juice", "Beverages", 45, 0.7, 10, 0.2, 0.2, 250),
    _food("biryani", "Chicken Biryani", "Indian", 180, 8, 25, 6, 1, 250),
    _food("butter-chicken", "Butter Chicken", "Indian", 180, 14, 8, 11, 1, 200),
    _food("palak-paneer", "Palak Paneer", "Indian", 150, 8, 7, 11, 2, 200),
    _food("samosa", "Samosa", "Indian", 262, 4, 24, 17, 2, 60),
    _food("idli", "Idli", "Indian", 39, 2, 8, 0.1, 0.4, 40),
    _food("dosa", "Dosa", "Indian", 120, 3, 18, 4, 1, 100),
    _food("pizza", "Pizza (1 slice)", "Fast Food", 285, 12, 36, 10, 2.5, 107),
    _food("burger", "Hamburger", "Fast Food", 295, 17, 24, 14, 1, 150),
    _food("french-fries", "French Fries", "Fast Food", 312, 3.4, 41, 15, 3.8, 100),
    _food("fried-chicken", "Fried Chicken", "Fast Food", 246, 19, 10, 15, 0.5, 100),
)
