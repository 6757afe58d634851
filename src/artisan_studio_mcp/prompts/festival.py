"""Festival marketing image prompts.

Templates used by tools/images.py (generate_festival_images). The slogan and
decor tables are keyed by festival name; unknown festivals use ``Default``.
Request params: product_name, artisan_name, festival, language.
"""

from __future__ import annotations

from ..pipeline import GenerationRequest, PromptPair

FESTIVAL_SLOGANS: dict[str, dict[str, str]] = {
    "Diwali": {
        "en": "Light up your home with handmade elegance!",
        "hi": "इस दिवाली अपने घर को हाथ से बनी सुंदरता से रोशन करें!",
    },
    "Holi": {
        "en": "Add colors of creativity to your celebrations!",
        "hi": "अपने त्योहारों में रचनात्मकता के रंग जोड़ें!",
    },
    "Eid": {
        "en": "Celebrate the spirit of togetherness with artisanal beauty.",
        "hi": "शिल्प सौंदर्य के साथ एकता की भावना का जश्न मनाएं।",
    },
    "Christmas": {
        "en": "Bring home handcrafted warmth this Christmas.",
        "hi": "इस क्रिसमस घर में दस्तकारी की गर्माहट लाएं।",
    },
    "Raksha Bandhan": {
        "en": "A perfect handcrafted gift of love for your sibling.",
        "hi": "अपने भाई-बहन के लिए प्यार का एक आदर्श हस्तनिर्मित उपहार।",
    },
    "Navratri": {
        "en": "Celebrate Navratri with vibrant, traditional crafts.",
        "hi": "नवरात्रि का जश्न मनाएं, जीवंत, पारंपरिक शिल्पों के साथ।",
    },
    "Onam": {
        "en": "Grace your home with traditional artistry this Onam.",
        "hi": "इस ओणम पर अपने घर को पारंपरिक कला से सजाएं।",
    },
    "Pongal": {
        "en": "Celebrate Pongal with the richness of tradition.",
        "hi": "पोंगल को परंपरा की समृद्धि के साथ मनाएं।",
    },
    "Makar Sankranti": {
        "en": "Soar high with handcrafted treasures this Makar Sankranti.",
        "hi": "इस मकर संक्रांति पर हाथ से बने खजानों के साथ ऊंची उड़ान भरें।",
    },
    "Baisakhi": {
        "en": "Celebrate the harvest of happiness with Baisakhi.",
        "hi": "बैसाखी के साथ खुशियों की फसल का जश्न मनाएं।",
    },
    "Durga Puja": {
        "en": "Embrace divine artistry this Durga Puja.",
        "hi": "इस दुर्गा पूजा में दिव्य कला को अपनाएं।",
    },
    "Ganesh Chaturthi": {
        "en": "Welcome home blessings with handcrafted devotion.",
        "hi": "हस्तनिर्मित भक्ति के साथ घर में आशीर्वाद का स्वागत करें।",
    },
    "Janmashtami": {
        "en": "Celebrate the divine play with timeless crafts.",
        "hi": "कालातीत शिल्पों के साथ दिव्य लीला का जश्न मनाएं।",
    },
    "Lohri": {
        "en": "Ignite the warmth of tradition this Lohri.",
        "hi": "इस लोहड़ी परंपरा की गर्माहट जलाएं।",
    },
    "Independence Day": {
        "en": "Celebrate freedom with the spirit of Indian craftsmanship.",
        "hi": "भारतीय शिल्प कौशल की भावना के साथ स्वतंत्रता का जश्न मनाएं।",
    },
    "Republic Day": {
        "en": "Honor the nation with the pride of Indian artistry.",
        "hi": "भारतीय कला के गौरव के साथ राष्ट्र का सम्मान करें।",
    },
    "Karwa Chauth": {
        "en": "A token of love, handcrafted for your special one.",
        "hi": "प्यार का प्रतीक, आपके खास के लिए दस्तकारी।",
    },
    "Guru Nanak Jayanti": {
        "en": "Reflect and rejoice with handcrafted serenity.",
        "hi": "हस्तनिर्मित शांति के साथ चिंतन और आनंद मनाएं।",
    },
    "Default": {
        "en": "Celebrate with a touch of handmade elegance.",
        "hi": "त्योहार हस्तनिर्मित सुंदरता के स्पर्श के साथ मनाएं।",
    },
}

FESTIVAL_DECOR: dict[str, str] = {
    "Diwali": "warm lighting, diyas, marigold, gold tones",
    "Holi": "colorful powder splashes, bright hues, joy & playfulness",
    "Raksha Bandhan": "rakhis, threads, gifts, siblings imagery, pastel tones",
    "Eid": "crescent moon, lanterns, stars, green-gold palette",
    "Christmas": "twinkling lights, pine leaves, snow, red-green palette",
    "Onam": "pookalam floral carpets, Kerala flowers, traditional motifs",
    "Ganesh Chaturthi": "Lord Ganesha icons, modak plates, festive orange tones",
    "Navratri": "dandiya sticks, goddess motifs, vibrant pinks and purples",
    "Baisakhi": "wheat fields, Punjabi dhol, traditional orange-yellow theme",
    "Default": "subtle cultural patterns, celebratory feel",
}

FESTIVAL_IMAGE_VARIATIONS: tuple[str, ...] = (
    "Festive Background",
    "Mockup Scene",
    "Clean Product Poster",
)

ART_DIRECTOR_SYSTEM = (
    "SYSTEM: You are an expert marketing art director. Create a photorealistic composite for a "
    "social media post. Always generate visuals, color palette, and decorations based strictly "
    "on the selected festival name. Never reuse elements from other festivals. Maintain natural "
    "product texture; do not distort the product."
)

_VARIATION_TEMPLATES: dict[str, str] = {
    "Festive Background": (
        "Photorealistic poster of the product. Background has {decor}. Warm color palette. "
        "Tasteful text overlay in {language} with top text = '{slogan}'. "
        "Watermark: 'by {artisan_name}' bottom-left."
    ),
    "Mockup Scene": (
        "Product placed in a simple, elegant living room mockup decorated for {festival} using "
        "elements like {decor}. Add a small watermark 'Handcrafted by {artisan_name}' in a "
        "bottom corner."
    ),
    "Clean Product Poster": (
        "Minimal background with a decorative {festival} motif (like a rangoli pattern for "
        "Diwali or stars for Eid). Product is centered. Large, bold text for '{product_name}'. "
        "Include shop/WhatsApp CTA button area and watermark 'by {artisan_name}'."
    ),
}

FESTIVAL_FALLBACK_TEMPLATE = (
    "Photorealistic product photo decorated for {festival} with {decor}. "
    "Do not add any text, logos, or watermarks."
)


def _lookup(table: dict, festival: str):
    """Case-insensitive festival lookup, falling back to the ``Default`` row."""
    wanted = festival.strip().casefold()
    for key, value in table.items():
        if key.casefold() == wanted:
            return value
    return table["Default"]


def festival_slogan(festival: str, language: str = "en") -> str:
    slogans = _lookup(FESTIVAL_SLOGANS, festival)
    return slogans.get(language, slogans["en"])


def festival_decor(festival: str) -> str:
    return _lookup(FESTIVAL_DECOR, festival)


def build_festival_image_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    params = request.params
    festival = params["festival"]
    language = params.get("language") or "en"
    fields = {
        "festival": festival,
        "language": language,
        "decor": festival_decor(festival),
        "slogan": festival_slogan(festival, language),
        "product_name": params["product_name"],
        "artisan_name": params.get("artisan_name") or "Artisan",
    }
    primary = _VARIATION_TEMPLATES[variation].format(**fields)
    fallback = FESTIVAL_FALLBACK_TEMPLATE.format(**fields)
    return PromptPair(
        f"{ART_DIRECTOR_SYSTEM} USER: {primary}",
        f"{ART_DIRECTOR_SYSTEM} USER: {fallback}",
    )
