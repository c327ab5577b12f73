'''Parsers of the single chunks of the container.'''
