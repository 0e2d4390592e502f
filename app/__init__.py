"""Entry points dos serviços FastAPI."""
