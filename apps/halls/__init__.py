"""Halls app package.

Holds the bookable venues and the staff who operate their equipment
(projectors, microphones, sound systems), together with the catalogue API
and the available-halls lookup.
"""
