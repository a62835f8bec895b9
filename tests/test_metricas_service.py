from app.services.metricas_service import ColetorMetricas


def test_taxa_acerto_sem_amostras_e_zero():
    metricas = ColetorMetricas()
    snapshot = metricas.snapshot()

    assert snapshot["cache"] == {"hits": 0, "misses": 0, "hit_rate": 0, "total": 0}


def test_taxa_acerto_com_duas_casas():
    metricas = ColetorMetricas()
    metricas.registrar_acerto_cache()
    metricas.registrar_falha_cache()
    metricas.registrar_falha_cache()

    assert metricas.taxa_acerto_cache() == 33.33
    assert metricas.snapshot()["cache"]["total"] == 3


def test_metade_de_acertos():
    metricas = ColetorMetricas()
    for _ in range(2):
        metricas.registrar_acerto_cache()
        metricas.registrar_falha_cache()

    assert metricas.snapshot()["cache"]["hit_rate"] == 50.0


def test_requisicoes_por_endpoint():
    metricas = ColetorMetricas()
    metricas.registrar_requisicao("GET", "/pessoas/{id}", 10.0, 200)
    metricas.registrar_requisicao("GET", "/pessoas/{id}", 20.0, 404)
    metricas.registrar_requisicao("POST", "/pessoas", 5.556, 201)

    snapshot = metricas.snapshot()
    por_endpoint = snapshot["requests"]["by_endpoint"]

    assert snapshot["requests"]["total"] == 3
    assert por_endpoint["GET /pessoas/{id}"] == {
        "requests": 2,
        "avg_response_time_ms": 15.0,
        "errors": 1,
        "error_rate": 50.0,
    }
    assert por_endpoint["POST /pessoas"]["avg_response_time_ms"] == 5.56
    assert por_endpoint["POST /pessoas"]["error_rate"] == 0
    assert snapshot["errors"]["total"] == 1


def test_status_abaixo_de_400_nao_conta_erro():
    metricas = ColetorMetricas()
    metricas.registrar_requisicao("DELETE", "/pessoas/{id}", 1.0, 204)
    metricas.registrar_requisicao("GET", "/", 1.0, 399)

    assert metricas.snapshot()["errors"]["total"] == 0


def test_status_500_conta_erro():
    metricas = ColetorMetricas()
    metricas.registrar_requisicao("GET", "/pessoas/{id}", 1.0, 500)

    assert metricas.snapshot()["requests"]["by_endpoint"]["GET /pessoas/{id}"]["errors"] == 1


def test_tempo_medio_de_endpoint_desconhecido():
    assert ColetorMetricas().tempo_medio_resposta("GET /nada") == 0


def test_reset_zera_contadores():
    metricas = ColetorMetricas()
    metricas.registrar_acerto_cache()
    metricas.registrar_requisicao("GET", "/metrics", 1.0, 500)

    metricas.reset()
    snapshot = metricas.snapshot()

    assert snapshot["cache"]["total"] == 0
    assert snapshot["requests"] == {"total": 0, "by_endpoint": {}}
    assert snapshot["errors"]["total"] == 0


def test_snapshot_tem_timestamp_e_uptime():
    snapshot = ColetorMetricas().snapshot()

    assert snapshot["uptime_seconds"] >= 0
    assert "T" in snapshot["timestamp"]
