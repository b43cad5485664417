"""Preset banks and categories offered before any custom entry exists."""

from src.domain.models.expenses import Bank, Category


BANK_PRESETS: tuple[Bank, ...] = (
    Bank(name="Itaú", color="#f97316"),
    Bank(name="Bradesco", color="#ef4444"),
    Bank(name="Santander", color="#ff0000"),
    Bank(name="Banco do Brasil", color="#ffff00"),
    Bank(name="Caixa", color="#0088cc"),
    Bank(name="Nubank", color="#9333ea"),
)

CATEGORY_PRESETS: tuple[Category, ...] = (
    Category(name="Food", icon="🍽️", color="#ef4444"),
    Category(name="Transport", icon="🚗", color="#3b82f6"),
    Category(name="Education", icon="📚", color="#8b5cf6"),
    Category(name="Healthcare", icon="🏥", color="#10b981"),
    Category(name="Entertainment", icon="🎬", color="#f59e0b"),
    Category(name="Shopping", icon="🛍️", color="#ec4899"),
    Category(name="Bills", icon="📄", color="#6b7280"),
    Category(name="Travel", icon="✈️", color="#06b6d4"),
)


__all__ = ["BANK_PRESETS", "CATEGORY_PRESETS"]
