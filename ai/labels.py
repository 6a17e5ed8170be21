CATEGORY_LABELS = {
    "analytical": "Analytical",
    "creative": "Creative",
    "social": "Social",
    "leadership": "Leadership",
    "practical": "Practical",
}
