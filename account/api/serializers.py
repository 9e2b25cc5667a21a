from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    # identifier bisa username atau email
    identifier = serializers.CharField(
        error_messages={"required": "Email/Username wajib diisi", "blank": "Email/Username wajib diisi"},
    )
    password = serializers.CharField(
        trim_whitespace=False,
        error_messages={"required": "Password wajib diisi", "blank": "Password wajib diisi"},
    )


def jemaat_summary(jemaat):
    if jemaat is None:
        return None
    keluarga = jemaat.keluarga
    return {
        "id": str(jemaat.pk),
        "nama": jemaat.nama,
        "jenisKelamin": jemaat.jenis_kelamin,
        "keluarga": {
            "id": str(keluarga.pk),
            "noBagungan": keluarga.no_bagungan,
            "rayon": {"id": str(keluarga.rayon_id), "namaRayon": keluarga.rayon.nama_rayon}
            if keluarga.rayon_id else None,
        } if keluarga else None,
    }


def user_payload(user):
    profile = getattr(user, "profile", None)
    return {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "role": profile.role if profile else None,
        "noWhatsapp": profile.no_whatsapp if profile else None,
        "jemaat": jemaat_summary(profile.jemaat if profile else None),
    }
