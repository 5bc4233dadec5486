import pytest
from pymongo.errors import ServerSelectionTimeoutError

from conftest import DNS_ERROR, REFUSED_ERROR, TIMED_OUT_ERROR, UNREACHABLE_ERROR
from kerkerker.components.database_settings import get_error_suggestions
from kerkerker.components.database_settings.diagnostics import DEFAULT_SUGGESTION
from kerkerker.components.database_settings.service import describe_error


@pytest.mark.parametrize(
    "error, title",
    [
        ("Server selection timed out after 5000 ms", "连接超时"),
        ("connect ETIMEDOUT; Timeout: 5.0s", "连接超时"),
        ("Authentication failed.", "认证失败"),
        ("getaddrinfo ENOTFOUND cluster0.mongodb.net", "DNS 解析失败"),
        ("connect ECONNREFUSED 127.0.0.1:27017", "连接被拒绝"),
        ("localhost:27017: [Errno 111] Connection refused", "连接被拒绝"),
        ("connect ENETUNREACH 10.0.0.1:27017", "网络不可达"),
        ("MONGODB_URI 环境变量未设置", "环境变量未配置"),
        ("Invalid URI scheme: URI must begin with 'mongodb://'", "URI 格式错误"),
        ("something odd happened", "连接错误"),
    ],
)
def test_classification(error, title):
    assert get_error_suggestions(error).title == title


def test_default_suggestions():
    suggestion = get_error_suggestions("")
    assert suggestion == DEFAULT_SUGGESTION
    assert len(suggestion.suggestions) == 3


def test_suggestions_are_ordered():
    suggestion = get_error_suggestions("ECONNREFUSED")
    assert suggestion.suggestions[0] == "确认 MongoDB 服务已启动"
    assert suggestion.to_dict()["title"] == "连接被拒绝"


@pytest.mark.parametrize(
    "message, title",
    [
        (REFUSED_ERROR, "连接被拒绝"),
        (DNS_ERROR, "DNS 解析失败"),
        (UNREACHABLE_ERROR, "网络不可达"),
        (TIMED_OUT_ERROR, "连接超时"),
    ],
)
def test_classification_of_driver_errors(message, title):
    described = describe_error(ServerSelectionTimeoutError(message))
    assert "Timeout:" not in described
    assert get_error_suggestions(described).title == title


def test_describe_error_keeps_plain_messages():
    assert describe_error(ValueError("Port must be an integer")) == "Port must be an integer"
    assert describe_error(ServerSelectionTimeoutError("")) == "Server selection timed out"
