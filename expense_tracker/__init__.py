"""
Smart Expense Tracker - Source Package

A single-user income/expense tracker that keeps its transactions in a
flat text file and charts where the money goes.

DESIGN PRINCIPLES:
1. The store is the source of truth; the file mirrors it after every change
2. Bad input is rejected before it reaches the store
3. A broken line on disk costs that line, never the whole file
4. The UI is a replaceable shell over plain functions
"""

__version__ = "1.0.0"
__author__ = "Smart Expense Tracker Team"
