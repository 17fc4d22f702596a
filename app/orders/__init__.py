"""
Orders app.

Holds the order records the settlement engine reads: each Order carries its
cost fields and an ordered list of product lines (selling price, selling
currency, purchase price). Payments reference orders but never mutate them.
"""
