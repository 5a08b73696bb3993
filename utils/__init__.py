"""utils: 유틸리티 함수들을 모아놓은 패키지.

Modules:
    base62: 정수 식별자 <-> 문자열 변환
    jwt_utils: ID 공급자 세션 토큰 검증
    formatters: 날짜/시간, 식별자 포맷팅
    exceptions: HTTP 에러 헬퍼
"""
