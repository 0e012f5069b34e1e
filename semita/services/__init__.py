"""
Services layer - business logic goes here.
Keep services focused on a single domain (services, complaints, votes...).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Services receive their DocumentStore; they never pick a backend themselves
- Services raise semita.core.errors exceptions; routes never translate them
- Notifications are only created here, as side effects
"""
