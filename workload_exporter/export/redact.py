"""连接串脱敏"""

from urllib.parse import urlsplit, urlunsplit

from .errors import ConnectionStringError


def clean_connection_string(conn_str: str) -> str:
    """去除连接串中的密码，保留用户名、主机、路径和查询参数

    Args:
        conn_str: URL 形式的连接串

    Returns:
        脱敏后的连接串

    Raises:
        ConnectionStringError: 连接串不是合法 URL
    """
    try:
        parts = urlsplit(conn_str)
        # 访问 port 以校验端口格式
        parts.port
    except ValueError as e:
        raise ConnectionStringError(f"解析连接串失败: {e}") from e

    if not parts.scheme:
        raise ConnectionStringError(
            "解析连接串失败: 缺少协议前缀"
        )

    netloc = parts.netloc
    if "@" in netloc:
        userinfo, hostinfo = netloc.rsplit("@", 1)
        username = userinfo.split(":", 1)[0]
        netloc = f"{username}@{hostinfo}"

    return urlunsplit(parts._replace(netloc=netloc))


__all__ = ["clean_connection_string"]
