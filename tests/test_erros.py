import pytest

from app.core.erros import FormatadorErros
from app.core.exceptions import OperacaoInvalidaError, PessoaDuplicadaError, PessoaNaoEncontradaError


def test_formato_com_detalhes_expostos():
    corpo = FormatadorErros(expor_detalhes=True).formatar(
        404, "PESSOA_NOT_FOUND", "Pessoa não encontrada", "/pessoas/1", {"id": "1"}
    )

    assert corpo["status_code"] == 404
    assert corpo["error"] == "PESSOA_NOT_FOUND"
    assert corpo["message"] == "Pessoa não encontrada"
    assert corpo["path"] == "/pessoas/1"
    assert corpo["details"] == {"id": "1"}
    assert corpo["timestamp"].endswith("+00:00")


def test_sem_detalhes_omite_campo():
    corpo = FormatadorErros(expor_detalhes=True).formatar(400, "BAD_REQUEST", "Falhou", "/x")

    assert "details" not in corpo


@pytest.mark.parametrize(
    "status_code, mensagem",
    [
        (400, "Dados da requisição inválidos"),
        (401, "Autenticação necessária"),
        (403, "Acesso negado"),
        (404, "Recurso não encontrado"),
        (409, "Conflito de recurso - não foi possível processar a requisição"),
        (422, "Não foi possível processar a requisição"),
        (418, "Falha na requisição"),
        (500, "Ocorreu um erro inesperado"),
        (503, "Ocorreu um erro inesperado"),
    ],
)
def test_mensagens_genericas_em_producao(status_code, mensagem):
    corpo = FormatadorErros(expor_detalhes=False).formatar(
        status_code, "QUALQUER", "mensagem interna", "/x", {"segredo": 1}
    )

    assert corpo["message"] == mensagem
    assert corpo["error"] == "QUALQUER"
    assert "details" not in corpo


def test_excecoes_de_negocio():
    nao_encontrada = PessoaNaoEncontradaError("a@x.com", "email")
    duplicada = PessoaDuplicadaError("cpf", "123.456.789-00")
    invalida = OperacaoInvalidaError("atualizar pessoa", "nenhum campo informado")

    assert (nao_encontrada.status_code, nao_encontrada.codigo) == (404, "PESSOA_NOT_FOUND")
    assert nao_encontrada.mensagem == 'Pessoa com email "a@x.com" não encontrada'
    assert (duplicada.status_code, duplicada.codigo) == (409, "DUPLICATE_PESSOA")
    assert duplicada.detalhes == {"field": "cpf", "value": "123.456.789-00"}
    assert (invalida.status_code, invalida.codigo) == (422, "INVALID_OPERATION")
    assert str(invalida) == "Não é possível atualizar pessoa: nenhum campo informado"
