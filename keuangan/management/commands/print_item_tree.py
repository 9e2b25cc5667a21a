from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from core.utils.formatting import format_rupiah
from keuangan.models import ItemKeuangan, PeriodeAnggaran
from keuangan.services.tree import ExpandedNodes, OrphanPolicy, build_item_tree, flatten_tree, iter_visible


class Command(BaseCommand):
    help = "Cetak pohon item keuangan satu periode (kode, nama, target)"

    def add_arguments(self, parser):
        parser.add_argument("periode", help="ID atau nama periode")
        parser.add_argument("--kategori", default=None, help="Kode kategori (mis. A)")
        parser.add_argument("--promote-orphans", action="store_true")
        parser.add_argument("--indent", type=int, default=2)
        parser.add_argument(
            "--expand", nargs="*", default=None, metavar="KODE",
            help="Hanya buka node dengan kode ini (tanpa kode = root saja). Default: semua terbuka",
        )

    def handle(self, *args, **options):
        periode = self._get_periode(options["periode"])

        qs = (
            ItemKeuangan.objects
            .filter(periode=periode, is_active=True)
            .select_related("kategori")
            .order_by("kategori__kode", "level", "urutan", "kode")
        )
        if options["kategori"]:
            qs = qs.filter(kategori__kode=options["kategori"].upper())

        policy = OrphanPolicy.PROMOTE if options["promote_orphans"] else OrphanPolicy.DROP
        roots = build_item_tree(qs, orphan_policy=policy)

        self.stdout.write(self.style.MIGRATE_HEADING(f"{periode.nama} ({periode.tahun})"))
        if not roots:
            self.stdout.write("  (belum ada item)")
            return

        pad = " " * options["indent"]
        width = 60
        for node, depth in iter_visible(roots, self._expanded(roots, options["expand"])):
            label = f"{pad * depth}{node['kode']}  {node['nama']}"
            amount = format_rupiah(node["totalTarget"]) if node["totalTarget"] is not None else "-"
            self.stdout.write(f"{label:<{width}} {amount:>20}")

    def _expanded(self, roots, kodes):
        if kodes is None:
            return None
        wanted = {k.strip().upper() for k in kodes if k.strip()}
        expanded = ExpandedNodes()
        found = set()
        for node, _depth in flatten_tree(roots):
            kode = node["kode"].upper()
            if kode in wanted:
                expanded.expand(node["id"])
                found.add(kode)
        missing = sorted(wanted - found)
        if missing:
            self.stderr.write(self.style.WARNING(f"Kode tidak ditemukan: {', '.join(missing)}"))
        return expanded

    def _get_periode(self, value):
        qs = PeriodeAnggaran.objects.all()
        try:
            periode = qs.filter(pk=value).first()
        except ValidationError:
            # bukan UUID -> cari berdasarkan nama
            periode = None
        if periode is None:
            periode = qs.filter(nama__iexact=value).first()
        if periode is None:
            raise CommandError(f"Periode '{value}' tidak ditemukan")
        return periode
