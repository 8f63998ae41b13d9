# viberoute/api/prompts.py
"""Prompt builders, one per category.

Each builder interpolates the city (and the hours for the itinerary) into a
fixed instruction. All prompts ask for an Italian reply formatted as JSON
and list every field the matching schema requires.
"""

from __future__ import annotations

RESPONSE_LANGUAGE = "ITALIANO"

_LANGUAGE_LINE = f"Rispondi in {RESPONSE_LANGUAGE}."


def build_itinerary_prompt(city: str, hours: int) -> str:
    return (
        f"Crea un itinerario di {hours} ore estremamente dettagliato e ottimizzato per {city}.\n"
        f"{_LANGUAGE_LINE}\n"
        "Per ogni tappa, fornisci:\n"
        "- 'time': Fascia oraria specifica\n"
        "- 'activity': Nome accattivante dell'attività\n"
        "- 'location': Indirizzo specifico o punto di riferimento\n"
        "- 'description': Descrizione approfondita di cosa fare e perché è speciale\n"
        "- 'historicalContext': Breve storia o significato culturale del luogo\n"
        "- 'costEstimate': Prezzo realistico in valuta locale\n"
        "- 'proTip': Un trucco locale segreto per migliorare l'esperienza\n"
        "- 'bestPhotoSpot': Dove scattare la foto migliore\n"
        "Formatta come un array JSON di oggetti."
    )


def build_safety_prompt(city: str) -> str:
    return (
        f"Fornisci un'analisi estremamente approfondita della sicurezza e dei quartieri per {city}.\n"
        f"{_LANGUAGE_LINE}\n"
        "Per ogni quartiere principale, includi:\n"
        "- 'neighborhood': Nome dell'area\n"
        "- 'rating': Punteggio di sicurezza da 1 a 10\n"
        "- 'tip': Un breve riassunto dell'atmosfera (\"vibe\")\n"
        "- 'safeZones': Strade o punti specifici molto sicuri\n"
        "- 'cautionAreas': Punti specifici da evitare o dove fare attenzione\n"
        "- 'commonScams': Descrizioni dettagliate delle truffe locali\n"
        "- 'nightSafety': Consigli specifici per le ore notturne\n"
        "- 'emergencyInfo': Informazioni sull'ospedale o la stazione di polizia più vicina per quell'area\n"
        "Formatta come un array JSON di oggetti."
    )


def build_bites_prompt(city: str) -> str:
    return (
        f"Trova i 'StreetEats' più autentici e non turistici a {city} "
        "dove i locali mangiano con meno di 15€.\n"
        f"{_LANGUAGE_LINE}\n"
        "Per ogni posto, fornisci:\n"
        "- 'name': Nome del locale\n"
        "- 'price': Prezzo tipico per un pasto\n"
        "- 'mustTry': Il piatto specifico da ordinare\n"
        "- 'dishHistory': La storia dietro quel piatto specifico\n"
        "- 'reason': Perché i locali amano questo posto\n"
        "- 'address': Indirizzo completo\n"
        "- 'mapsUrl': Link diretto a Google Maps\n"
        "- 'bestTime': Quando visitare per evitare la folla\n"
        "- 'type': Categoria (es. Panificio, Chiosco, Trattoria)\n"
        "Formatta come un array JSON di oggetti."
    )


def build_social_prompt(city: str) -> str:
    return (
        f"Trova tour sociali o attività di gruppo reali e vivaci a {city}.\n"
        f"{_LANGUAGE_LINE}\n"
        "Per ognuno, fornisci:\n"
        "- 'activity': Nome del tour/attività\n"
        "- 'vibe': Atmosfera sociale (es. Festa, Culturale, Relax)\n"
        "- 'description': Descrizione approfondita dell'esperienza\n"
        "- 'totalCost': Prezzo per persona\n"
        "- 'groupSize': Numero tipico di persone\n"
        "- 'meetingPoint': Punto di incontro specifico\n"
        "- 'duration': Quanto dura\n"
        "- 'included': Cosa è incluso nel prezzo\n"
        "- 'whatToBring': Articoli essenziali per l'ospite\n"
        "Formatta come un array JSON di oggetti."
    )


def build_overview_prompt(city: str) -> str:
    return (
        f"Fornisci una guida di viaggio estremamente completa e persuasiva per {city}.\n"
        f"{_LANGUAGE_LINE}\n"
        "Includi:\n"
        "1. 'description': Una descrizione persuasiva di più paragrafi che motivi il lettore "
        "a visitare la città. Descrivi l'anima unica della città, le tradizioni profonde e "
        "perché è una destinazione imperdibile.\n"
        "2. 'typicalFoods': Un elenco dettagliato di piatti tipici. Per ogni piatto includi:\n"
        "   - 'name': Nome del piatto\n"
        "   - 'description': Descrizione dettagliata del piatto\n"
        "   - 'history': L'origine storica e la storia del piatto\n"
        "   - 'priceRange': Prezzo indicativo\n"
        "   - 'recommendedPlaces': Un elenco di 2-3 ristoranti o locali reali ed esistenti "
        "dove è possibile mangiare questo piatto. Per ogni posto includi:\n"
        "     - 'placeName': Nome del ristorante\n"
        f"     - 'mapsUrl': Un URL di ricerca diretto su Google Maps per questo specifico ristorante a {city}\n"
        "3. 'monuments': Un elenco dettagliato di monumenti e punti di riferimento imperdibili. "
        "Per ognuno includi:\n"
        "   - 'name': Nome del monumento\n"
        "   - 'description': Descrizione dettagliata e significato\n"
        "   - 'whyVisit': Ragioni persuasive per cui un viaggiatore dovrebbe visitare questo posto\n"
        "   - 'transport': I migliori mezzi pubblici o metodi per raggiungerlo\n"
        "   - 'price': Prezzo indicativo del biglietto d'ingresso o costo\n"
        "4. 'transportTips': Informazioni approfondite sui trasporti pubblici, costi nascosti "
        "e i modi migliori per risparmiare.\n"
        "5. 'localEtiquette': Norme culturali complete, inclusi mance, norme sociali ed errori comuni.\n"
        "6. 'bestTime': Suddivisione dettagliata delle stagioni, festival specifici e i mesi "
        "migliori per diversi tipi di viaggiatori.\n"
        "7. 'hiddenGems': Un elenco di 3-5 posti che NON sono trappole per turisti ma sono "
        "essenziali per l'esperienza locale. Per ognuno includi 'name' e 'description'.\n"
        "Formatta come un oggetto JSON con queste chiavi."
    )
