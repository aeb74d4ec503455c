"""
Utility Class Lookup Tables.

Fixed scales used by the class-to-style resolver. Only this practical subset
of utility classes is resolved; anything else is ignored.
"""

from typing import Dict

FONT_SIZES: Dict[str, str] = {
  "xs": "12px",
  "sm": "14px",
  "base": "16px",
  "lg": "18px",
  "xl": "20px",
  "2xl": "24px",
  "3xl": "30px",
  "4xl": "36px",
  "5xl": "48px",
  "6xl": "60px",
}

FONT_WEIGHTS: Dict[str, str] = {
  "bold": "bold",
  "semibold": "600",
  "medium": "500",
  "normal": "normal",
  "light": "300",
}

COLORS: Dict[str, str] = {
  "white": "#ffffff",
  "black": "#000000",
  "gray-100": "#f3f4f6",
  "gray-200": "#e5e7eb",
  "gray-300": "#d1d5db",
  "gray-400": "#9ca3af",
  "gray-500": "#6b7280",
  "gray-600": "#4b5563",
  "gray-700": "#374151",
  "gray-800": "#1f2937",
  "gray-900": "#111827",
  "red-500": "#ef4444",
  "blue-500": "#3b82f6",
  "green-500": "#22c55e",
  "yellow-500": "#eab308",
  "purple-500": "#a855f7",
  "pink-500": "#ec4899",
}

BORDER_RADII: Dict[str, str] = {
  "rounded": "4px",
  "rounded-lg": "8px",
  "rounded-full": "9999px",
}

# Single-token layout helpers: class -> (property, value)
LAYOUT_CLASSES: Dict[str, tuple] = {
  "flex": ("display", "flex"),
  "flex-col": ("flexDirection", "column"),
  "items-center": ("alignItems", "center"),
  "justify-center": ("justifyContent", "center"),
  "gap-2": ("gap", "8px"),
  "gap-4": ("gap", "16px"),
}

# Spacing prefix -> style properties receiving `n * SPACING_UNIT` px
SPACING_PREFIXES: Dict[str, tuple] = {
  "p": ("padding",),
  "px": ("paddingLeft", "paddingRight"),
  "py": ("paddingTop", "paddingBottom"),
  "m": ("margin",),
  "mx": ("marginLeft", "marginRight"),
  "my": ("marginTop", "marginBottom"),
}

SPACING_UNIT = 4
