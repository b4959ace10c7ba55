# _*_ coding: utf-8 _*_
"""Blob PGP encryption function."""
