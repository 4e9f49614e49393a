"""Reservation workflow services"""
