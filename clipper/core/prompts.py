highlight_template = """Analysiere dieses Video-Transkript und finde die 3-5 besten Clip-Momente.

Transkript:
{transcript}

Antworte NUR als JSON-Array:
[{{"start": 0, "end": 30, "title": "Clip Titel", "reason": "Warum interessant", "score": 95}}]

Regeln: start/end in Sekunden, Clips 15-60 Sek lang, score 1-100"""
