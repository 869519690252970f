# src/meshery_helm/core/__init__.py
"""
Core do conversor: exceções tipadas, payloads de erro, contexto de conversão,
configuração e logging.

Nada neste pacote conhece Helm ou o formato de Design; ele fornece a
infraestrutura compartilhada pelas etapas do pipeline (chart, packaging,
converter).
"""
