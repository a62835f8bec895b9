"""Módulo core - configuração, logging, erros e middleware"""
