"""API de Pessoas - cadastro com cache read-through e invalidação nas escritas"""
