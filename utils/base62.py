"""base62: 정수 식별자 <-> 문자열 변환 모듈.

클라이언트에 노출되는 모든 식별자(PAT, 신고, 스레드, 사용자 등)는
이 모듈의 문자열 형태를 사용합니다. 상태나 I/O가 없는 순수 함수입니다.
"""

BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# 지원 범위: 부호 없는 64비트 정수
MAX_VALUE = (1 << 64) - 1

_INDEX = {char: i for i, char in enumerate(BASE62_ALPHABET)}


class MalformedToken(ValueError):
    """base62 문자열을 정수로 해석할 수 없을 때 발생합니다."""


def encode(value: int) -> str:
    """음이 아닌 정수를 base62 문자열로 변환합니다.

    Raises:
        ValueError: 지원 범위를 벗어난 경우.
    """
    if value < 0 or value > MAX_VALUE:
        raise ValueError(f"base62 인코딩 범위를 벗어났습니다: {value}")
    if value == 0:
        return BASE62_ALPHABET[0]

    chars = []
    while value:
        value, rem = divmod(value, 62)
        chars.append(BASE62_ALPHABET[rem])
    return "".join(reversed(chars))


def decode(text: str) -> int:
    """base62 문자열을 정수로 변환합니다.

    Raises:
        MalformedToken: 빈 문자열, 허용되지 않은 문자, 64비트 초과.
    """
    if not text:
        raise MalformedToken("빈 식별자입니다.")

    value = 0
    for char in text:
        digit = _INDEX.get(char)
        if digit is None:
            raise MalformedToken(f"허용되지 않은 문자입니다: {char!r}")
        value = value * 62 + digit
        if value > MAX_VALUE:
            raise MalformedToken("64비트 범위를 초과했습니다.")
    return value
