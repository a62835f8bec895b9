"""Módulo services - cache, métricas e regras de negócio"""
