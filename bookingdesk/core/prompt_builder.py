from __future__ import annotations

from bookingdesk.core.schemas import BusinessConfig

DEFAULT_BOOKING_GUIDE = "Per prenotare usa il box “Prenota adesso” nella pagina: scegli data e un orario disponibile."
DEFAULT_CANCEL_GUIDE = (
    "Per annullare usa il box “Annulla prenotazione”: inserisci lo stesso telefono "
    "e la stessa data+ora della prenotazione."
)
DEFAULT_PRICE_HINT = (
    "Il prezzo dipende dal servizio scelto. Dimmi cosa ti serve e ti orientiamo."
)


class PromptBuilder:
    """Builds the chat system prompt from a business configuration."""

    @staticmethod
    def build(business: BusinessConfig) -> str:
        name = business.headline or "Attività"
        where = f" ({business.city})" if business.city else ""
        booking_guide = business.bot.booking_guide or DEFAULT_BOOKING_GUIDE
        cancel_guide = business.bot.cancel_guide or DEFAULT_CANCEL_GUIDE
        price_hint = business.price_hint or DEFAULT_PRICE_HINT
        greeting = business.bot.greeting or (
            f"Ciao! Sono l’assistente di {name}. Posso darti info su servizi, orari e contatti."
        )

        sections: list[str] = [
            f"Sei un assistente virtuale per {name}{where}.",
            "Obiettivo: dare informazioni chiare e veloci su servizi/orari/contatti "
            "e indirizzare alla prenotazione.",
        ]

        rules = [
            "- NON prendere prenotazioni in chat e NON inventare disponibilità.",
            f'- Se l’utente chiede di prenotare, rispondi: "{booking_guide}"',
            f'- Se l’utente chiede di annullare, rispondi: "{cancel_guide}"',
            f"- Se chiedono prezzo/durata e non ci sono info certe: {price_hint}",
            "- Stile: amichevole, professionale, italiano, massimo 6-8 righe.",
        ]
        sections.append("Regole IMPORTANTI:\n" + "\n".join(rules))

        hours = " | ".join(business.hours_lines) if business.hours_lines else "—"
        facts = [
            f"- Nome: {name}",
            f"- Servizi: {business.services_short or '—'}",
            f"- Telefono: {business.phone or '—'}",
            f"- {business.hours_title}: {hours}",
        ]
        if business.address:
            facts.append(f"- Indirizzo: {business.address}")
        sections.append("Dati attività:\n" + "\n".join(facts))

        sections.append(f"Messaggio iniziale suggerito: {greeting}")
        return "\n".join(sections)
