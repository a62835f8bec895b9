"""Módulo routers - rotas HTTP"""
