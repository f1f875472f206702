from .clock import cookie_store, frozen_clock  # load the cookie_store and frozen_clock fixtures
