"""Catalog Access Layer.

영상/채널/재생목록 카탈로그 조회 레이어 (Cassandra, MongoDB 겸용).
"""
