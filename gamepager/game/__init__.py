""" Games: models and listings """
