"""
Shared default categories offered to every user.
Rows are stored with a null user_id and ``is_default`` set.
"""

# (name, icon, color, type)
DEFAULT_CATEGORIES = [
    ("Food & Dining", "🍽️", "#10B981", "expense"),
    ("Transportation", "🚗", "#3B82F6", "expense"),
    ("Shopping", "🛍️", "#8B5CF6", "expense"),
    ("Utilities", "⚡", "#F59E0B", "expense"),
    ("Entertainment", "🎬", "#EF4444", "expense"),
    ("Healthcare", "🏥", "#EC4899", "expense"),
    ("Education", "📚", "#06B6D4", "expense"),
    ("Travel", "✈️", "#84CC16", "expense"),
    ("Fitness", "💪", "#F97316", "expense"),
    ("Subscriptions", "📱", "#6366F1", "expense"),
    ("Salary", "💰", "#10B981", "income"),
    ("Freelance", "💼", "#3B82F6", "income"),
    ("Investment", "📈", "#8B5CF6", "income"),
]

EXPENSE_CATEGORIES = [name for name, _, _, kind in DEFAULT_CATEGORIES if kind == "expense"]
INCOME_CATEGORIES = [name for name, _, _, kind in DEFAULT_CATEGORIES if kind == "income"]
