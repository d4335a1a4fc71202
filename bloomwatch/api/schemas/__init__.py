# This file marks the schemas package for API request and response models.
# Grouping contracts here keeps response typing easy to navigate.
