# backend/newsfeed/news/__init__.py
"""
News 모듈 패키지

각 모듈별 책임:
- client.py: News API(newsapi.org v2) HTTP 호출
- service.py: 헤드라인/검색/맞춤 뉴스 조회 및 API 키 선택
- summarizer.py: 기사 요약 생성, 관심사 검색어 생성
- router.py: /api/news 엔드포인트
"""
