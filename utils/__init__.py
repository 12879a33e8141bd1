"""Yardımcı modüller: alan doğrulayıcıları ve CLI çıktı biçimlendirme."""
