"""Simple two-language (es/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "es": "Impacto de Asteroides",
        "en": "Asteroid Impact",
    },
    "btn_prev_day": {
        "es": "← Ayer",
        "en": "← Previous day",
    },
    "btn_next_day": {
        "es": "Mañana →",
        "en": "Next day →",
    },
    "btn_today": {
        "es": "Hoy",
        "en": "Today",
    },
    "label_date": {
        "es": "Fecha",
        "en": "Date",
    },
    "label_asteroid": {
        "es": "Asteroide",
        "en": "Asteroid",
    },
    "label_none": {
        "es": "— ninguno —",
        "en": "— none —",
    },
    "label_lat": {
        "es": "Latitud",
        "en": "Latitude",
    },
    "label_lon": {
        "es": "Longitud",
        "en": "Longitude",
    },
    "loading_catalog": {
        "es": "⏳ Cargando asteroides para {date}...",
        "en": "⏳ Loading asteroids for {date}...",
    },
    "empty_catalog": {
        "es": "No hay asteroides para {date}.",
        "en": "No asteroids for {date}.",
    },
    "btn_crash": {
        "es": "🚀 CRASH",
        "en": "🚀 CRASH",
    },
    "btn_pick": {
        "es": "📍 Marcar punto",
        "en": "📍 Mark point",
    },
    "btn_cancel": {
        "es": "❌ Cancelar",
        "en": "❌ Cancel",
    },
    "btn_confirm": {
        "es": "✅ Confirmar Impacto",
        "en": "✅ Confirm Impact",
    },
    "btn_back": {
        "es": "↺ Volver al globo",
        "en": "↺ Back to globe",
    },
    "instruction_target": {
        "es": "🎯 Elige el punto de impacto en el globo",
        "en": "🎯 Choose the impact point on the globe",
    },
    "report_title": {
        "es": "Punto de Impacto",
        "en": "Impact Point",
    },
    "crater": {
        "es": "Cráter",
        "en": "Crater",
    },
    "crater_diameter": {
        "es": "Diámetro",
        "en": "Diameter",
    },
    "crater_depth": {
        "es": "Profundidad",
        "en": "Depth",
    },
    "seismic": {
        "es": "Magnitud (Richter)",
        "en": "Magnitude (Richter)",
    },
    "energy": {
        "es": "Energía (megatones)",
        "en": "Energy (megatons)",
    },
    "devastation": {
        "es": "Devastación",
        "en": "Devastation",
    },
    "mitigation": {
        "es": "Recomendaciones de mitigación",
        "en": "Mitigation advice",
    },
    "loading_mitigation": {
        "es": "Generando recomendaciones...",
        "en": "Generating recommendations...",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
