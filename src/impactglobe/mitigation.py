"""Civil-protection mitigation advice for a confirmed impact, via the Claude API."""

import logging
import os

import anthropic
import numpy as np

from impactglobe.models import ImpactConsequence, ImpactEvent

logger = logging.getLogger(__name__)

# Offline fallbacks. Placeholders: {magnitude}, {megatons}, {crater}, {name}.
_TEMPLATES_EN: tuple[str, ...] = (
    "For a magnitude {magnitude} impact, we recommend:\n"
    "1. Immediate evacuation within a 50 km radius\n"
    "2. Underground shelters for vulnerable people\n"
    "3. Early seismic warning system\n"
    "4. Contingency plan for critical infrastructure",
    "Technical measures for a {megatons} megaton impact:\n"
    "• Earthquake-resistant structures within 30 km\n"
    "• Emergency supplies for 72 hours\n"
    "• Satellite communication protocols\n"
    "• Field hospitals in safe areas",
    "Civil protection for a {crater} m crater:\n"
    "- 5 km exclusion zone around the epicenter\n"
    "- Continuous air quality monitoring\n"
    "- Specialized rescue teams\n"
    "- Resistant temporary shelters",
    "Mitigation for asteroid {name}:\n"
    "🔴 Priority evacuation within 20 km\n"
    "🟡 Shelters in reinforced basements\n"
    "🟢 Emergency kit for every family\n"
    "🔵 Designated escape routes",
    "Specific technical recommendations:\n"
    "• Isolate power grids\n"
    "• Protect water sources\n"
    "• Backup communications\n"
    "• First-aid equipment",
    "Immediate response plan:\n"
    "1. Activate the emergency protocol\n"
    "2. Staged evacuation by zone\n"
    "3. Safe meeting points\n"
    "4. Coordination with civil defense",
    "Required structural measures:\n"
    "- Buildings above the seismic code\n"
    "- Bunkers for immediate protection\n"
    "- Redundant alert systems\n"
    "- Hardened critical infrastructure",
    "Essential population protection:\n"
    "• Evacuation procedure training\n"
    "• Regular impact drills\n"
    "• Risk zone mapping\n"
    "• International support alliances",
    "Technical mitigation strategy:\n"
    "🎯 Continuous satellite monitoring\n"
    "🎯 Seismic sensor network\n"
    "🎯 Satellite communications\n"
    "🎯 Rapid response teams",
    "Final safety recommendations:\n"
    "- Keep at least 10 km away\n"
    "- Wear respiratory protection\n"
    "- Follow official instructions\n"
    "- Have a family emergency plan",
)

_TEMPLATES_ES: tuple[str, ...] = (
    "Para un impacto de magnitud {magnitude} Richter, se recomienda:\n"
    "1. Evacuación inmediata en radio de 50 km\n"
    "2. Refugios subterráneos para población vulnerable\n"
    "3. Sistema de alerta temprana sísmica\n"
    "4. Plan de contingencia para infraestructura crítica",
    "Medidas técnicas para impacto de {megatons} megatones:\n"
    "• Estructuras antisísmicas en zona de 30 km\n"
    "• Reservas de emergencia para 72 horas\n"
    "• Protocolos de comunicación satelital\n"
    "• Hospitales de campaña en áreas seguras",
    "Protección civil ante cráter de {crater} m:\n"
    "- Zona de exclusión de 5 km del epicentro\n"
    "- Monitoreo de calidad del aire continuo\n"
    "- Equipos de rescate especializados\n"
    "- Albergues temporales resistentes",
    "Mitigación para asteroide {name}:\n"
    "🔴 Evacuación prioritaria en radio 20 km\n"
    "🟡 Refugios en sótanos reforzados\n"
    "🟢 Kit de emergencia por familia\n"
    "🔵 Rutas de escape designadas",
    "Recomendaciones técnicas específicas:\n"
    "• Aislamiento de redes eléctricas\n"
    "• Protección de fuentes de agua\n"
    "• Comunicaciones de backup\n"
    "• Equipos de primeros auxilios",
    "Plan de respuesta inmediata:\n"
    "1. Activación de protocolo de emergencia\n"
    "2. Evacuación escalonada por zonas\n"
    "3. Puntos de reunión seguros\n"
    "4. Coordinación con defensa civil",
    "Medidas estructurales requeridas:\n"
    "- Edificios con norma sísmica superior\n"
    "- Bunkers para protección inmediata\n"
    "- Sistemas de alerta redundantes\n"
    "- Infraestructura crítica blindada",
    "Protección poblacional esencial:\n"
    "• Capacitación en procedimientos de evacuación\n"
    "• Simulacros regulares de impacto\n"
    "• Mapeo de zonas de riesgo\n"
    "• Alianzas internacionales de apoyo",
    "Estrategia de mitigación técnica:\n"
    "🎯 Monitoreo satelital continuo\n"
    "🎯 Red de sensores sísmicos\n"
    "🎯 Comunicaciones por satélite\n"
    "🎯 Equipos de respuesta rápida",
    "Recomendaciones finales de seguridad:\n"
    "- Mantener distancia mínima de 10 km\n"
    "- Usar protección respiratoria\n"
    "- Seguir instrucciones oficiales\n"
    "- Tener plan familiar de emergencia",
)

_TEMPLATES = {"en": _TEMPLATES_EN, "es": _TEMPLATES_ES}
_UNKNOWN_NAME = {"en": "Unknown", "es": "Desconocido"}


def fallback_advice(
    event: ImpactEvent,
    consequence: ImpactConsequence,
    lang: str = "en",
    rng: np.random.Generator | None = None,
) -> str:
    """Pick one canned recommendation in lang and fill in the impact figures."""
    if lang not in _TEMPLATES:
        lang = "en"
    if rng is None:
        rng = np.random.default_rng()
    templates = _TEMPLATES[lang]
    template = templates[int(rng.integers(len(templates)))]
    return template.format(
        magnitude=f"{consequence.seismic_magnitude:.1f}",
        megatons=f"{consequence.energy_megatons:.1f}",
        crater=f"{consequence.crater_diameter_m:.1f}",
        name=event.asteroid.name or _UNKNOWN_NAME[lang],
    )


def _reply_text(message: anthropic.types.Message) -> str | None:
    """First non-empty text block of a reply, or None."""
    for block in message.content:
        text = getattr(block, "text", None)
        if isinstance(text, str) and text.strip():
            return text
    return None


def generate_mitigation_advice(
    event: ImpactEvent,
    consequence: ImpactConsequence,
    lang: str = "en",
    rng: np.random.Generator | None = None,
) -> str:
    """Generate short mitigation advice for an impact.

    Uses Claude when ANTHROPIC_API_KEY is set; otherwise, or when the API call
    fails, returns a canned recommendation.

    Args:
        event: The confirmed impact.
        consequence: Its computed consequences.
        lang: Language code ('es' or 'en') for the generated text.
        rng: Random source for choosing the canned fallback.

    Returns:
        A short plain-text list of recommendations.
    """
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        return fallback_advice(event, consequence, lang, rng)

    language = "Spanish" if lang == "es" else "English"
    system_prompt = (
        "You are a civil-protection advisor writing short, practical mitigation "
        "recommendations for a simulated asteroid impact.\n\n"
        "Rules:\n"
        "- One heading line followed by exactly four bullet points\n"
        "- Concrete actions only; no physics explanations\n"
        f"- Write in {language}\n"
        "- The scenario is fictional; do not add disclaimers"
    )
    user_content = (
        f"Asteroid: {event.asteroid.name}\n"
        f"Impact point: lat {event.lat:.3f}, lon {event.lon:.3f}\n"
        f"Crater diameter: {consequence.crater_diameter_m:.1f} m\n"
        f"Crater depth: {consequence.crater_depth_m:.0f} m\n"
        f"Seismic magnitude: {consequence.seismic_magnitude:.1f}\n"
        f"Energy: {consequence.energy_megatons:.1f} Mt\n"
        f"Devastation radius: {consequence.devastation_radius_m / 1000:.2f} km\n"
    )

    try:
        client = anthropic.Anthropic(api_key=api_key)
        message = client.messages.create(
            model="claude-sonnet-4-6",
            max_tokens=400,
            system=system_prompt,
            messages=[{"role": "user", "content": user_content}],
        )
    except anthropic.APIError as e:
        logger.warning("mitigation advice fell back to template: %s", e)
        return fallback_advice(event, consequence, lang, rng)

    text = _reply_text(message)
    if text is None:
        logger.warning("mitigation reply had no text; fell back to template")
        return fallback_advice(event, consequence, lang, rng)
    return text
