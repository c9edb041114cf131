"""Domain layer — models, ports and pure services. No fpdf2 imports here."""
