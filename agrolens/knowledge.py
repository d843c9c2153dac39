"""
Static disease knowledge: descriptions and remediation advice.
"""

from agrolens.labels import DiseaseLabel

GENERIC_DESCRIPTION = (
    "Unknown condition detected. Please consult with an agricultural expert "
    "for proper diagnosis and treatment."
)

GENERIC_RECOMMENDATIONS = (
    "Consult with local agricultural extension services",
    "Get professional diagnosis from plant pathologist",
    "Monitor plant symptoms closely",
    "Maintain good field hygiene practices",
    "Consider laboratory testing for accurate identification",
)

DESCRIPTIONS = {
    DiseaseLabel.BACTERIAL_LEAF_BLIGHT: (
        "Bacterial leaf blight is a serious disease caused by Xanthomonas oryzae pv. oryzae. "
        "It causes wilting and yellowing of leaves, significantly reducing rice yield."
    ),
    DiseaseLabel.BROWN_SPOT: (
        "Brown spot is a fungal disease caused by Bipolaris oryzae. It appears as brown "
        "lesions on leaves and can reduce photosynthesis and yield."
    ),
    DiseaseLabel.LEAF_BLAST: (
        "Rice blast is a fungal disease caused by Magnaporthe oryzae. It can cause significant "
        "yield losses by destroying leaves, stems, and panicles."
    ),
    DiseaseLabel.SHEATH_BLIGHT: (
        "Sheath blight is caused by the fungus Rhizoctonia solani. It affects the sheath and "
        "leaves, causing lesions that can reduce photosynthesis and yield."
    ),
    DiseaseLabel.TUNGRO: (
        "Tungro virus is transmitted by green leafhoppers. It causes stunted growth, "
        "yellowing of leaves, and reduced tillering in rice plants."
    ),
}

RECOMMENDATIONS = {
    DiseaseLabel.BACTERIAL_LEAF_BLIGHT: (
        "Use certified disease-free seeds",
        "Avoid overhead irrigation during flowering",
        "Apply copper-based bactericides early",
        "Remove and destroy infected plants",
        "Practice field sanitation and equipment disinfection",
    ),
    DiseaseLabel.BROWN_SPOT: (
        "Improve field drainage to reduce humidity",
        "Apply potassium fertilizer to strengthen plants",
        "Use certified disease-resistant varieties",
        "Apply fungicides like carbendazim if severe",
        "Remove infected plant debris",
    ),
    DiseaseLabel.LEAF_BLAST: (
        "Ensure good air circulation in the field",
        "Avoid excessive nitrogen fertilization",
        "Plant blast-resistant rice varieties",
        "Apply preventive fungicides during susceptible growth stages",
        "Implement crop rotation practices",
    ),
    DiseaseLabel.SHEATH_BLIGHT: (
        "Maintain proper field drainage",
        "Avoid excessive nitrogen application",
        "Use balanced fertilization",
        "Apply fungicides when disease pressure is high",
        "Remove infected plant debris",
    ),
    DiseaseLabel.TUNGRO: (
        "Control green leafhopper vectors with insecticides",
        "Use virus-resistant rice varieties",
        "Remove and destroy infected plants",
        "Implement proper field sanitation",
        "Avoid planting near infected fields",
    ),
}


def describe(label) -> str:
    """Human-readable description; accepts a DiseaseLabel or any display name."""
    return DESCRIPTIONS.get(DiseaseLabel.parse(label), GENERIC_DESCRIPTION)


def recommend(label) -> list:
    """Ordered remediation steps; never empty."""
    return list(RECOMMENDATIONS.get(DiseaseLabel.parse(label), GENERIC_RECOMMENDATIONS))
