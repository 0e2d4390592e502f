"""Camada compartilhada: configuração, logging, banco, observabilidade."""
