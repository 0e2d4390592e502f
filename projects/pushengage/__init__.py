"""Integração com a PushEngage: gateway de API, sync de subscribers e service worker."""
